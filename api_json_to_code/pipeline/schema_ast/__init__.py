"""
Schema AST module.

Contains the schema node model and the parsed type expression grammar.
"""

from __future__ import annotations

from .nodes import NodeKind, SchemaNode
from .type_expr import (
    Deferred,
    InlineStruct,
    Literal,
    LiteralUnion,
    Mapping,
    Named,
    Optional,
    Sequence,
    TypeExpr,
    Union,
    Void,
    enum_labels,
    is_enum,
    is_struct,
    parse_type,
    strip_optional,
)

__all__ = [
    "NodeKind",
    "SchemaNode",
    "TypeExpr",
    "Void",
    "Named",
    "Literal",
    "Sequence",
    "Mapping",
    "Deferred",
    "InlineStruct",
    "Optional",
    "LiteralUnion",
    "Union",
    "parse_type",
    "strip_optional",
    "is_enum",
    "is_struct",
    "enum_labels",
]
