"""
Type resolver.

Decides the declared type of every type-bearing site (method return,
parameter, field, event payload): a type mapping target, a synthesized enum,
a synthesized nested value type, or a converted primitive. Synthesized types
are registered in the scope passed in by the caller.
"""

from __future__ import annotations

import logging

from ...errors import MissingEnumMappingError, TypeExpressionError, TypeMappingMismatchError, UnresolvedUnionError
from ...utils import enum_constant, to_title
from ..schema_ast.nodes import NodeKind, SchemaNode
from ..schema_ast.type_expr import (
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
from .ir_nodes import EnumDef, FieldDef, NestedTypeDef, Role, Scope, TypeKind, TypeRef
from .type_mapping import TypeMappingTable

logger = logging.getLogger(__name__)

# Scalars whose plain form cannot represent absence
BOXABLE_SCALARS = {"number", "boolean"}
SCALARS = {"string", "number", "boolean"}


def raw_type_name(type_node: SchemaNode) -> str | None:
    """Return the raw type string of a type node, None for a JSON null node."""
    if type_node.raw is None:
        return None
    if isinstance(type_node.raw, dict):
        name = type_node.raw.get("name")
        return None if name is None else str(name)
    return str(type_node.raw)


def convert_builtin_type(expr: TypeExpr, path: str, raw: str | None, required: bool = True) -> TypeRef:
    """
    Convert a type expression without mapping or synthesis.

    Args:
        expr: The parsed type
        path: Schema path of the site, for error messages
        raw: The raw type string, for error messages
        required: Whether the site is required; optional numbers and booleans are boxed

    Returns:
        The resolved type

    Raises:
        UnresolvedUnionError: If a union remains after removing a leading null|
    """
    expr, nullable = strip_optional(expr)
    return _convert(expr, path, raw or "", boxed=nullable or not required)


def _convert(expr: TypeExpr, path: str, raw: str, boxed: bool = False) -> TypeRef:
    if isinstance(expr, Void):
        return TypeRef(kind=TypeKind.VOID, name="void")

    if isinstance(expr, Deferred):
        if expr.inner is None:
            return TypeRef(kind=TypeKind.VOID, name="void")
        return convert_builtin_type(expr.inner, path, raw, required=not boxed)

    if isinstance(expr, Sequence):
        return TypeRef(kind=TypeKind.SEQUENCE, name="Array", type_args=[_convert_arg(expr.item, path, raw)])

    if isinstance(expr, Mapping):
        return TypeRef(
            kind=TypeKind.MAPPING,
            name="Object",
            type_args=[_convert_arg(expr.key, path, raw), _convert_arg(expr.value, path, raw)],
        )

    if isinstance(expr, (Union, LiteralUnion, Optional)):
        raise UnresolvedUnionError(path, raw)

    if isinstance(expr, Literal):
        raise TypeExpressionError(raw, f"string literal \"{expr.value}\" outside a union at {path}")

    if isinstance(expr, InlineStruct):
        # Only reachable inside a container: an untyped object
        return TypeRef(kind=TypeKind.NAMED, name="Object")

    if isinstance(expr, Named):
        if expr.name in SCALARS and not expr.args:
            return TypeRef(kind=TypeKind.PRIMITIVE, name=expr.name, boxed=boxed and expr.name in BOXABLE_SCALARS)
        return TypeRef(kind=TypeKind.NAMED, name=expr.name, type_args=[_convert_arg(arg, path, raw) for arg in expr.args])

    raise TypeExpressionError(raw, f"unsupported type at {path}")


def _convert_arg(expr: TypeExpr, path: str, raw: str) -> TypeRef:
    # Type arguments can always be absent
    inner, _ = strip_optional(expr)
    return _convert(inner, path, raw, boxed=True)


class TypeResolver:
    """Resolves type-bearing sites against the type mapping table."""

    def __init__(self, type_mappings: TypeMappingTable):
        """
        Initialize the resolver.

        Args:
            type_mappings: Path-keyed overrides supplied by the operator
        """
        self.type_mappings = type_mappings

    def resolve(self, owner: SchemaNode, scope: Scope, role: Role) -> TypeRef:
        """
        Resolve the type of a site.

        Args:
            owner: The method, parameter, field or event owning the "type" node
            scope: Scope receiving any synthesized type
            role: Role of a nested type synthesized here

        Returns:
            The resolved type

        Raises:
            MissingEnumMappingError: For a string-literal union without a mapping
            TypeMappingMismatchError: If the mapping expects another raw type
            UnresolvedUnionError: For any other union without a mapping
        """
        type_node = owner.type_node()
        raw = raw_type_name(type_node)

        # The mapping is keyed by the path of the owning method, param or field.
        mapping = self.type_mappings.find_for_path(owner.path)
        if mapping is None:
            expr = parse_type(raw)
            enum = is_enum(expr)
            struct = is_struct(expr)
            if enum:
                raise MissingEnumMappingError(owner.path)
            if not struct:
                return convert_builtin_type(expr, owner.path, raw, required=owner.is_required)
            type_name = self._synthesized_name(owner)
        else:
            if mapping.source != raw:
                raise TypeMappingMismatchError(owner.path, mapping.source, raw or "null")
            type_name = mapping.target
            if mapping.definer is not None:
                mapping.definer(scope, role)
                return TypeRef(kind=TypeKind.NAMED, name=type_name)
            try:
                expr = parse_type(raw)
            except TypeExpressionError:
                # Raw types outside the grammar (callbacks) map to the target as is
                logger.debug("Mapping opaque type %r at %s to %s", raw, owner.path, type_name)
                return TypeRef(kind=TypeKind.NAMED, name=type_name)
            enum = is_enum(expr)
            struct = is_struct(expr)

        if enum:
            labels = [enum_constant(label) for label in enum_labels(expr)]
            scope.add_enum(EnumDef(name=type_name, labels=labels))
            return TypeRef(kind=TypeKind.ENUM, name=type_name)
        if struct:
            self._define_nested_type(type_name, type_node, scope, role)
            return TypeRef(kind=TypeKind.NESTED, name=type_name)
        return TypeRef(kind=TypeKind.NAMED, name=type_name)

    def _synthesized_name(self, owner: SchemaNode) -> str:
        if owner.kind == NodeKind.FIELD:
            return to_title(owner.name)
        # Prefix with the method (or interface) name so same-named objects do not collide
        parent = owner.parent
        parent_name = parent.name if parent is not None else ""
        return to_title(parent_name) + to_title(owner.name)

    def _define_nested_type(self, name: str, type_node: SchemaNode, scope: Scope, role: Role) -> NestedTypeDef:
        nested = NestedTypeDef(name=name, role=role, outer_name=scope.name if scope.is_nested else None)
        nested.scope = scope.child_scope(name, nested)

        properties = (type_node.raw.get("properties") or {}) if isinstance(type_node.raw, dict) else {}
        for key, raw_field in properties.items():
            field_node = type_node.child(raw_field, NodeKind.FIELD, key=key)
            field_type = self.resolve(field_node, nested.scope, role)
            nested.fields.append(FieldDef(name=key, type_ref=field_type, is_required=field_node.is_required))

        if not scope.add_nested_type(nested):
            return scope.get_nested_type(name) or nested
        logger.debug("Synthesized %s type %s at %s", role.value, name, type_node.path)
        return nested
