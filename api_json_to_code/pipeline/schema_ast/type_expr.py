"""
Type expression grammar.

Raw type strings in the API description follow a small grammar:

    null|T              optional marker
    "a"|"b"             string-literal union (enum)
    Array<T>            sequence
    Object<K, V>        mapping
    Promise<T>          deferred value (bare Promise carries no value)
    Object              inline struct described by "properties"
    Name                any other named type

The string is parsed once into a tagged variant so resolution can match on
structure instead of re-reading substrings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...errors import TypeExpressionError

STRUCT_MARKER = "Object"
NULL_MARKER = "null"


@dataclass(frozen=True)
class TypeExpr:
    """Base class for all type expressions."""


@dataclass(frozen=True)
class Void(TypeExpr):
    """No value (a JSON null type node)."""


@dataclass(frozen=True)
class Named(TypeExpr):
    """A bare identifier, optionally with generic arguments."""

    name: str = ""
    args: tuple[TypeExpr, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Literal(TypeExpr):
    """A quoted string literal."""

    value: str = ""


@dataclass(frozen=True)
class Sequence(TypeExpr):
    """Array<T>."""

    item: TypeExpr = field(default_factory=Void)


@dataclass(frozen=True)
class Mapping(TypeExpr):
    """Object<K, V>."""

    key: TypeExpr = field(default_factory=Void)
    value: TypeExpr = field(default_factory=Void)


@dataclass(frozen=True)
class Deferred(TypeExpr):
    """Promise<T>; inner is None for a bare Promise."""

    inner: TypeExpr | None = None


@dataclass(frozen=True)
class InlineStruct(TypeExpr):
    """The literal Object: a struct whose fields are listed inline."""


@dataclass(frozen=True)
class Optional(TypeExpr):
    """null|T."""

    inner: TypeExpr = field(default_factory=Void)


@dataclass(frozen=True)
class LiteralUnion(TypeExpr):
    """A union of string literals, possibly including null."""

    labels: tuple[str, ...] = field(default_factory=tuple)
    nullable: bool = False


@dataclass(frozen=True)
class Union(TypeExpr):
    """Any other union; cannot be converted without a type mapping."""

    alternatives: tuple[TypeExpr, ...] = field(default_factory=tuple)


_DELIMITERS = set('<>,|"')


class _Parser:
    def __init__(self, raw: str):
        self.raw = raw
        self.pos = 0

    def parse(self) -> TypeExpr:
        expr = self._union()
        self._skip_spaces()
        if self.pos != len(self.raw):
            self._fail(f"unexpected '{self.raw[self.pos]}' at {self.pos}")
        return expr

    def _fail(self, reason: str):
        raise TypeExpressionError(self.raw, reason)

    def _skip_spaces(self) -> None:
        while self.pos < len(self.raw) and self.raw[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        self._skip_spaces()
        return self.raw[self.pos] if self.pos < len(self.raw) else ""

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            self._fail(f"expected '{char}' at {self.pos}")
        self.pos += 1

    def _union(self) -> TypeExpr:
        alternatives = [self._term()]
        while self._peek() == "|":
            self.pos += 1
            alternatives.append(self._term())
        return _build_union(self.raw, alternatives)

    def _term(self) -> TypeExpr:
        char = self._peek()
        if char == '"':
            end = self.raw.find('"', self.pos + 1)
            if end < 0:
                self._fail("unterminated string literal")
            value = self.raw[self.pos + 1 : end]
            self.pos = end + 1
            return Literal(value)

        start = self.pos
        while self.pos < len(self.raw) and self.raw[self.pos] not in _DELIMITERS and not self.raw[self.pos].isspace():
            self.pos += 1
        name = self.raw[start : self.pos]
        if not name:
            self._fail(f"expected a type at {start}")

        args: list[TypeExpr] = []
        if self._peek() == "<":
            self.pos += 1
            args.append(self._union())
            while self._peek() == ",":
                self.pos += 1
                args.append(self._union())
            self._expect(">")
        return _build_named(self.raw, name, args)


def _build_named(raw: str, name: str, args: list[TypeExpr]) -> TypeExpr:
    if name == "Array":
        if len(args) != 1:
            raise TypeExpressionError(raw, "Array takes exactly one type argument")
        return Sequence(args[0])
    if name == "Promise":
        if len(args) > 1:
            raise TypeExpressionError(raw, "Promise takes at most one type argument")
        return Deferred(args[0] if args else None)
    if name == STRUCT_MARKER:
        if not args:
            return InlineStruct()
        if len(args) != 2:
            raise TypeExpressionError(raw, "Object takes a key and a value type")
        return Mapping(args[0], args[1])
    return Named(name, tuple(args))


def _is_null(expr: TypeExpr) -> bool:
    return isinstance(expr, Named) and expr.name == NULL_MARKER and not expr.args


def _build_union(raw: str, alternatives: list[TypeExpr]) -> TypeExpr:
    if len(alternatives) == 1:
        return alternatives[0]

    # A quoted alternative after the first one makes the whole union an enum.
    if any(isinstance(alt, Literal) for alt in alternatives[1:]):
        labels = []
        nullable = False
        for alt in alternatives:
            if _is_null(alt):
                nullable = True
            elif isinstance(alt, Literal):
                labels.append(alt.value)
            else:
                raise TypeExpressionError(raw, "string-literal union mixes literals and types")
        return LiteralUnion(tuple(labels), nullable)

    if _is_null(alternatives[0]):
        return Optional(_build_union(raw, alternatives[1:]))

    return Union(tuple(alternatives))


def parse_type(raw: str | None) -> TypeExpr:
    """
    Parse a raw type string.

    Args:
        raw: The type string, or None for a JSON null type node

    Returns:
        The parsed type expression

    Raises:
        TypeExpressionError: If the string does not follow the grammar
    """
    if raw is None:
        return Void()
    return _Parser(raw).parse()


def strip_optional(expr: TypeExpr) -> tuple[TypeExpr, bool]:
    """Remove a leading null| marker, returning the inner type and whether it was present."""
    if isinstance(expr, Optional):
        return expr.inner, True
    return expr, False


def is_enum(expr: TypeExpr) -> bool:
    """Whether the expression contains a string-literal union anywhere."""
    if isinstance(expr, LiteralUnion):
        return True
    if isinstance(expr, Named):
        return any(is_enum(arg) for arg in expr.args)
    if isinstance(expr, Sequence):
        return is_enum(expr.item)
    if isinstance(expr, Mapping):
        return is_enum(expr.key) or is_enum(expr.value)
    if isinstance(expr, Deferred):
        return expr.inner is not None and is_enum(expr.inner)
    if isinstance(expr, Optional):
        return is_enum(expr.inner)
    if isinstance(expr, Union):
        return any(is_enum(alt) for alt in expr.alternatives)
    return False


def is_struct(expr: TypeExpr) -> bool:
    """Whether the expression is an inline struct, optionally null-marked."""
    inner, _ = strip_optional(expr)
    return isinstance(inner, InlineStruct)


def enum_labels(expr: TypeExpr) -> list[str]:
    """Return the literal labels of the first string-literal union in the expression."""
    if isinstance(expr, LiteralUnion):
        return list(expr.labels)
    children: list[TypeExpr] = []
    if isinstance(expr, Named):
        children = list(expr.args)
    elif isinstance(expr, Sequence):
        children = [expr.item]
    elif isinstance(expr, Mapping):
        children = [expr.key, expr.value]
    elif isinstance(expr, Deferred) and expr.inner is not None:
        children = [expr.inner]
    elif isinstance(expr, Optional):
        children = [expr.inner]
    elif isinstance(expr, Union):
        children = list(expr.alternatives)
    for child in children:
        labels = enum_labels(child)
        if labels:
            return labels
    return []
