"""
Configuration for the code generator pipeline.

The tables the resolver and the emitters consult are plain values built
once by the driver and passed down, so independent generators never share
state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..errors import ConfigError
from .analyzer.event_table import EventTable
from .analyzer.type_mapping import TypeMappingTable
from .tables import DEFAULT_EVENT_ALLOW_LIST, DEFAULT_EVENTS, DEFAULT_IMPORTS, DEFAULT_METHOD_RENAMES


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True


def default_event_table() -> EventTable:
    table = EventTable()
    for path, (prefix, category) in DEFAULT_EVENTS.items():
        table.add(path, prefix, category)
    return table


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Path-keyed type overrides
    type_mappings: TypeMappingTable = field(default_factory=TypeMappingTable)

    # Event path -> generated name prefix and subscription pattern
    events: EventTable = field(default_factory=default_event_table)

    # Events that are emitted; None emits every classified event
    event_allow_list: list[str] | None = field(default_factory=lambda: list(DEFAULT_EVENT_ALLOW_LIST))

    # API method name -> generated method name
    method_renames: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_METHOD_RENAMES))

    # Package declared at the top of every generated file (empty = none)
    java_package: str = ""

    # Text placed verbatim before the package declaration
    license_header: str = ""

    # Imports of every generated file
    imports: list[str] = field(default_factory=lambda: list(DEFAULT_IMPORTS))

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Fail instead of warning when two shapes collide on a synthesized name
    strict_type_collisions: bool = False

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    def emits_event(self, path: str) -> bool:
        return self.event_allow_list is None or path in self.event_allow_list

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """
        Create a config from a dictionary.

        Event entries are merged over the default event table; every other
        key replaces the default.

        Raises:
            ConfigError: If a key is unknown or a value is malformed
        """
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "type_mappings":
                config.type_mappings = TypeMappingTable.from_dict(v)
            elif k == "events":
                config.events = config.events.merged(EventTable.from_dict(v))
            elif k == "output":
                if not isinstance(v, dict):
                    raise ConfigError("'output' must be an object")
                try:
                    mode = OutputMode(v.get("mode", OutputMode.ERROR_IF_EXISTS))
                except ValueError as e:
                    raise ConfigError(f"Unknown output mode: {v.get('mode')}") from e
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
            else:
                raise ConfigError(f"Unknown configuration key: {k}")
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "type_mappings": self.type_mappings.to_dict(),
            "events": self.events.to_dict(),
            "event_allow_list": self.event_allow_list,
            "method_renames": self.method_renames,
            "java_package": self.java_package,
            "license_header": self.license_header,
            "imports": self.imports,
            "add_generation_comment": self.add_generation_comment,
            "strict_type_collisions": self.strict_type_collisions,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
            },
        }
