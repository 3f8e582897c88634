"""
API analyzer that transforms one interface of the API description into IR.

Walks the interface's members top-down, resolving every type through the
TypeResolver with the interface's own scope. Nothing is shared between
interfaces, so each one can be analyzed independently.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..schema_ast.nodes import NodeKind, SchemaNode
from .ir_nodes import EventDef, InterfaceDef, MethodDef, ParamDef, Role, Scope
from .resolver import TypeResolver

if TYPE_CHECKING:
    from ..config import CodeGeneratorConfig

logger = logging.getLogger(__name__)


class ApiAnalyzer:
    """Analyzes interfaces of an API description and builds IR."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration holding the tables
        """
        self.config = config
        self.resolver = TypeResolver(config.type_mappings)

    def analyze_interface(self, key: str, raw: dict[str, Any]) -> InterfaceDef:
        """
        Analyze one interface.

        Args:
            key: Key of the interface in the API description
            raw: The interface descriptor

        Returns:
            InterfaceDef with all members resolved
        """
        node = SchemaNode(raw, NodeKind.INTERFACE, key=key)
        interface = InterfaceDef(name=node.name, path=node.path)
        interface.scope = Scope(node.name, strict=self.config.strict_type_collisions)

        members = raw.get("members") or {}
        for member_key, raw_member in members.items():
            kind = raw_member.get("kind")
            member_node = node.child(raw_member, NodeKind.METHOD if kind == "method" else NodeKind.EVENT, key=member_key)
            if kind == "method":
                interface.methods.append(self._analyze_method(member_node, interface.scope))
            elif kind == "event":
                interface.events.append(self._analyze_event(member_node, interface.scope))
            else:
                logger.debug("Skipping %s member %s", kind, member_node.path)

        logger.debug(
            "Analyzed %s: %d methods, %d events, %d enums, %d nested types",
            interface.name,
            len(interface.methods),
            len(interface.events),
            len(interface.scope.enums),
            len(interface.scope.nested_types),
        )
        return interface

    def _analyze_method(self, node: SchemaNode, scope: Scope) -> MethodDef:
        method = MethodDef(
            name=self.config.method_renames.get(node.name, node.name),
            original_name=node.name,
        )
        method.return_type = self.resolver.resolve(node, scope, Role.READ_FROM_API)

        args = node.raw.get("args") or {}
        for arg_key, raw_arg in args.items():
            param_node = node.child(raw_arg, NodeKind.PARAM, key=arg_key)
            param_type = self.resolver.resolve(param_node, scope, Role.SUPPLIED_TO_API)
            method.params.append(ParamDef(name=param_node.name, type_ref=param_type, is_required=param_node.is_required))
        return method

    def _analyze_event(self, node: SchemaNode, scope: Scope) -> EventDef:
        info = self.config.events.classify(node.path)
        type_ref = self.resolver.resolve(node, scope, Role.READ_FROM_API)
        return EventDef(name=node.name, path=node.path, type_ref=type_ref, info=info)
