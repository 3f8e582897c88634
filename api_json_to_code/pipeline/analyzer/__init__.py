"""
Analyzer module.

Contains the type mapping and event tables, type resolution, and IR building.
"""

from __future__ import annotations

from .analyzer import ApiAnalyzer
from .event_table import EventTable
from .ir_nodes import (
    EnumDef,
    EventCategory,
    EventDef,
    EventInfo,
    FieldDef,
    InterfaceDef,
    MethodDef,
    NestedTypeDef,
    ParamDef,
    Role,
    Scope,
    TypeKind,
    TypeRef,
)
from .resolver import TypeResolver, convert_builtin_type
from .type_mapping import TypeMapping, TypeMappingTable, declared_types_definer

__all__ = [
    "ApiAnalyzer",
    "EnumDef",
    "EventCategory",
    "EventDef",
    "EventInfo",
    "EventTable",
    "FieldDef",
    "InterfaceDef",
    "MethodDef",
    "NestedTypeDef",
    "ParamDef",
    "Role",
    "Scope",
    "TypeKind",
    "TypeMapping",
    "TypeMappingTable",
    "TypeRef",
    "TypeResolver",
    "convert_builtin_type",
    "declared_types_definer",
]
