"""
Errors raised while resolving and emitting an API description.

Every failure aborts the run: a resolution error means the schema and the
configured tables have drifted apart and an operator has to fix one of them.
"""

from __future__ import annotations


class ApiGenerationError(Exception):
    """Base class for all generator failures."""

    pass


class TypeExpressionError(ApiGenerationError):
    """Raised when a raw type string does not follow the type grammar."""

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot parse type '{raw}': {reason}")


class MissingEnumMappingError(ApiGenerationError):
    """Raised when a string-literal union has no type mapping entry.

    The union itself does not carry a name, so every enum needs an explicit
    target name in the type mapping table.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot create enum, type mapping is missing for: {path}")


class TypeMappingMismatchError(ApiGenerationError):
    """Raised when the raw type at a mapped path differs from the mapping's source."""

    def __init__(self, path: str, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(f"Unexpected source type for: {path}: expected '{expected}', got '{actual}'")


class UnresolvedUnionError(ApiGenerationError):
    """Raised when a union type reaches primitive conversion."""

    def __init__(self, path: str, raw: str):
        self.path = path
        self.raw = raw
        super().__init__(f"Missing mapping for type union: {path}: {raw}")


class MissingEventClassificationError(ApiGenerationError):
    """Raised when an event path is not in the event classification table."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Type mapping is missing for event: {path}")


class UnknownEventCategoryError(ApiGenerationError):
    """Raised when an event category has no emission pattern."""

    def __init__(self, path: str, category: object):
        self.path = path
        self.category = category
        super().__init__(f"Unexpected event category {category} for: {path}")


class TypeCollisionError(ApiGenerationError):
    """Raised in strict mode when two different shapes share a synthesized name."""

    def __init__(self, scope_name: str, type_name: str):
        self.scope_name = scope_name
        self.type_name = type_name
        super().__init__(f"Type '{type_name}' is already defined in '{scope_name}' with a different shape")


class ConfigError(ApiGenerationError):
    """Raised when a configuration dictionary is malformed."""

    pass


class OutputWriteError(ApiGenerationError):
    """Raised when generated output fails validation or cannot be written.

    This can happen when:
    - The generated source has unbalanced braces
    - The generated source has no interface declaration
    - The target file exists and overwriting was not requested
    """

    pass
