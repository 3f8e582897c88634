"""
Type mapping table.

Operator-supplied overrides keyed by schema path. An entry forces the name
emitted for the type at that path, and may carry a definer that registers
the types it needs directly into the resolving scope instead of letting the
resolver synthesize them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ...errors import ConfigError
from ..schema_ast.type_expr import parse_type
from .ir_nodes import EnumDef, FieldDef, NestedTypeDef, Role, Scope

TypeDefiner = Callable[[Scope, Role], None]


@dataclass(frozen=True)
class TypeMapping:
    """A forced type for one schema path."""

    source: str  # Raw type string expected at the path
    target: str  # Name to emit
    definer: TypeDefiner | None = None


class TypeMappingTable:
    """Path-keyed type mapping entries."""

    def __init__(self, mappings: dict[str, TypeMapping] | None = None):
        self._mappings: dict[str, TypeMapping] = dict(mappings or {})

    def add(self, path: str, source: str, target: str, definer: TypeDefiner | None = None) -> TypeMappingTable:
        """Add an entry and return the table for chaining."""
        self._mappings[path] = TypeMapping(source, target, definer)
        return self

    def find_for_path(self, path: str) -> TypeMapping | None:
        return self._mappings.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self._mappings

    def __iter__(self) -> Iterator[str]:
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def copy(self) -> TypeMappingTable:
        return TypeMappingTable(self._mappings)

    @staticmethod
    def from_dict(d: dict) -> TypeMappingTable:
        """
        Create a table from its JSON form.

        Args:
            d: {"Path": {"from": "raw type", "to": "Name", "define": {...}}}

        Returns:
            The table

        Raises:
            ConfigError: If an entry is missing "from" or "to"
        """
        table = TypeMappingTable()
        for path, entry in d.items():
            if not isinstance(entry, dict) or "from" not in entry or "to" not in entry:
                raise ConfigError(f"Type mapping for '{path}' needs 'from' and 'to'")
            definer = None
            if "define" in entry:
                definer = declared_types_definer(entry["define"])
            table.add(path, entry["from"], entry["to"], definer)
        return table

    def to_dict(self) -> dict:
        """Convert to the JSON form; definers given as callables are not serializable and are skipped."""
        result = {}
        for path, mapping in self._mappings.items():
            entry: dict = {"from": mapping.source, "to": mapping.target}
            declared = getattr(mapping.definer, "declared", None)
            if declared is not None:
                entry["define"] = declared
            result[path] = entry
        return result


def declared_types_definer(declared: dict) -> TypeDefiner:
    """
    Build a definer from declared enums and classes.

    Args:
        declared: {"enums": {"Name": ["label", ...]},
                   "classes": {"Name": {"field": "raw type", ...}}}

    Returns:
        A definer registering those types in the scope it is given, with
        classes taking the role of the site that uses them.
        Class fields are resolved with primitive conversion only.
    """
    # Imported here to avoid a cycle: the resolver consumes this table.
    from .resolver import convert_builtin_type

    enums = declared.get("enums", {})
    classes = declared.get("classes", {})

    def define(scope: Scope, role: Role) -> None:
        for name, labels in enums.items():
            scope.add_enum(EnumDef(name=name, labels=[str(label) for label in labels]))
        for name, fields in classes.items():
            nested = NestedTypeDef(name=name, role=role, outer_name=scope.name if scope.is_nested else None)
            nested.scope = scope.child_scope(name, nested)
            for field_name, raw_type in fields.items():
                optional = raw_type.startswith("null|")
                type_ref = convert_builtin_type(parse_type(raw_type), f"{scope.name}.{name}.{field_name}", raw_type, required=not optional)
                nested.fields.append(FieldDef(name=field_name, type_ref=type_ref, is_required=not optional))
            scope.add_nested_type(nested)

    define.declared = declared  # type: ignore[attr-defined]
    return define
