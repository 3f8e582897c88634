"""API description to Code Generator

A Python package for generating typed interface declarations from a
language-neutral API description. Resolves inline types into synthesized
enums and nested value types, expands trailing optional parameters into
overloads, and writes one Java interface per described interface.
"""

__version__ = "0.1.0"

from .errors import ApiGenerationError
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "ApiGenerationError",
]
