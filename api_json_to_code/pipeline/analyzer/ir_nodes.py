"""
IR (Intermediate Representation) node definitions.

These nodes represent one analyzed interface, ready for code generation.
All types are resolved and every synthesized enum or nested value type is
registered in the scope that owns it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ...errors import TypeCollisionError

logger = logging.getLogger(__name__)


class TypeKind(Enum):
    """Kind of type in the IR."""

    VOID = "void"  # no value
    PRIMITIVE = "primitive"  # string, number, boolean
    SEQUENCE = "sequence"  # Array<T>
    MAPPING = "mapping"  # Object<K, V>
    ENUM = "enum"  # synthesized enum
    NESTED = "nested"  # synthesized nested value type
    NAMED = "named"  # any other name, including type mapping targets


class Role(Enum):
    """Whether a nested value type is read from the API or supplied to it."""

    READ_FROM_API = "read"  # accessors
    SUPPLIED_TO_API = "supplied"  # fluent builder


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.PRIMITIVE
    name: str = ""

    # For container and generic types
    type_args: list[TypeRef] = field(default_factory=list)

    # Use the nullable form of a scalar so absence is representable
    boxed: bool = False

    @property
    def is_void(self) -> bool:
        return self.kind == TypeKind.VOID

    @property
    def is_nested(self) -> bool:
        return self.kind == TypeKind.NESTED


@dataclass
class FieldDef:
    """A field of a nested value type."""

    name: str = ""
    type_ref: TypeRef | None = None
    is_required: bool = True


@dataclass
class EnumDef:
    """A synthesized enum."""

    name: str = ""
    labels: list[str] = field(default_factory=list)

    def shape(self) -> tuple:
        return tuple(self.labels)


class Scope:
    """Deduplicating registry of synthesized types.

    Every interface and every nested value type owns one. The first
    definition registered under a name wins; later registrations of the
    same name are reported as duplicates and dropped.
    """

    def __init__(self, name: str, owner: NestedTypeDef | None = None, strict: bool = False):
        """
        Initialize the scope.

        Args:
            name: Name of the owning interface or nested type
            owner: The owning nested type, None when an interface owns the scope
            strict: Raise TypeCollisionError when a duplicate has a different shape
        """
        self.name = name
        self.owner = owner
        self.strict = strict
        self._enums: dict[str, EnumDef] = {}
        self._nested_types: dict[str, NestedTypeDef] = {}

    @property
    def is_nested(self) -> bool:
        """Whether a nested value type owns this scope."""
        return self.owner is not None

    @property
    def enums(self) -> list[EnumDef]:
        return list(self._enums.values())

    @property
    def nested_types(self) -> list[NestedTypeDef]:
        return list(self._nested_types.values())

    def get_enum(self, name: str) -> EnumDef | None:
        return self._enums.get(name)

    def get_nested_type(self, name: str) -> NestedTypeDef | None:
        return self._nested_types.get(name)

    def child_scope(self, name: str, owner: NestedTypeDef) -> Scope:
        """Create the scope of a nested type defined in this scope."""
        return Scope(name, owner=owner, strict=self.strict)

    def add_enum(self, enum_def: EnumDef) -> bool:
        """
        Register an enum.

        Returns:
            True if the enum was added, False if the name was already taken
        """
        existing = self._enums.get(enum_def.name)
        if existing is not None:
            self._check_collision(enum_def.name, existing.shape(), enum_def.shape())
            return False
        self._enums[enum_def.name] = enum_def
        logger.debug("Registered enum %s in %s", enum_def.name, self.name)
        return True

    def add_nested_type(self, nested_def: NestedTypeDef) -> bool:
        """
        Register a nested value type.

        Returns:
            True if the type was added, False if the name was already taken
        """
        existing = self._nested_types.get(nested_def.name)
        if existing is not None:
            self._check_collision(nested_def.name, existing.shape(), nested_def.shape())
            return False
        self._nested_types[nested_def.name] = nested_def
        logger.debug("Registered nested type %s in %s", nested_def.name, self.name)
        return True

    def _check_collision(self, type_name: str, existing_shape: tuple, new_shape: tuple) -> None:
        if existing_shape == new_shape:
            logger.debug("Type %s already defined in %s", type_name, self.name)
            return
        if self.strict:
            raise TypeCollisionError(self.name, type_name)
        logger.warning("Type %s already defined in %s with a different shape, keeping the first definition", type_name, self.name)


@dataclass
class NestedTypeDef:
    """A synthesized nested value type."""

    name: str = ""
    role: Role = Role.SUPPLIED_TO_API
    fields: list[FieldDef] = field(default_factory=list)

    # Name of the enclosing nested type, None when the interface owns it
    outer_name: str | None = None

    # Scope for the enums and nested types used by the fields
    scope: Scope | None = None

    def shape(self) -> tuple:
        return tuple((f.name, _type_signature(f.type_ref)) for f in self.fields)


def _type_signature(type_ref: TypeRef | None) -> tuple:
    if type_ref is None:
        return ()
    return (type_ref.kind, type_ref.name, type_ref.boxed, tuple(_type_signature(arg) for arg in type_ref.type_args))


@dataclass
class ParamDef:
    """A method parameter."""

    name: str = ""
    type_ref: TypeRef | None = None
    is_required: bool = True

    @property
    def is_optional(self) -> bool:
        return not self.is_required


@dataclass
class MethodDef:
    """A method of an interface."""

    name: str = ""  # Name after the rename table
    original_name: str = ""  # Name in the API description
    return_type: TypeRef | None = None
    params: list[ParamDef] = field(default_factory=list)

    def trailing_optional_count(self) -> int:
        """Number of optional parameters at the end of the parameter list."""
        count = 0
        for param in reversed(self.params):
            if not param.is_optional:
                break
            count += 1
        return count


class EventCategory(Enum):
    """Subscription pattern of an event."""

    WAIT_FOR = "WAIT_FOR"  # one-shot future
    LISTENER = "LISTENER"  # persistent listener
    HANDLER = "HANDLER"  # single-slot handler


@dataclass(frozen=True)
class EventInfo:
    """Classification of an event."""

    prefix: str = ""  # Name used in the generated operations
    category: EventCategory = EventCategory.WAIT_FOR


@dataclass
class EventDef:
    """An event of an interface."""

    name: str = ""
    path: str = ""
    type_ref: TypeRef | None = None
    info: EventInfo | None = None


@dataclass
class InterfaceDef:
    """A top-level interface and everything it owns."""

    name: str = ""
    path: str = ""
    scope: Scope | None = None
    methods: list[MethodDef] = field(default_factory=list)
    events: list[EventDef] = field(default_factory=list)
