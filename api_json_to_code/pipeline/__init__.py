"""
Pipeline - API description to code generator.

This module provides a multi-phase architecture for generating interface
declarations from an API description:

1. Phase 1 (Schema nodes): Position raw members by schema path
2. Phase 2 (Analyzer): Resolve types against the type mapping table and build IR
3. Phase 3 (Backend): Render declarations for the target language
4. Phase 4 (Output): Atomic writes of the generated units
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .generator import PipelineGenerator
from .output import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
]
