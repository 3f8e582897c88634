"""
Pipeline generator.

Runs the phases for every interface of an API description:

1. Phase 1 (Schema nodes): Wrap raw members with names and schema paths
2. Phase 2 (Analyzer): Resolve types, synthesize enums and nested types, build IR
3. Phase 3 (Backend): Render declarations through the language backend
4. Phase 4 (Output): Optionally write each unit atomically
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..errors import ApiGenerationError, OutputWriteError
from .analyzer import ApiAnalyzer, InterfaceDef
from .backends import BACKENDS
from .config import CodeGeneratorConfig, OutputMode
from .output import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates source units from an API description."""

    def __init__(
        self,
        api: dict[str, Any],
        config: CodeGeneratorConfig | None = None,
        language: str = "java",
        generation_comment: str = "",
    ):
        """
        Initialize the generator.

        Args:
            api: The API description, interface name -> interface descriptor
            config: Code generation configuration
            language: Target language
            generation_comment: Comment placed on the first line of every unit
        """
        if language not in BACKENDS:
            raise ApiGenerationError(f"Language not supported: {language}")
        self.api = api
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.generation_comment = generation_comment if self.config.add_generation_comment else ""
        self.backend = BACKENDS[language](self.config)

    def interface_names(self) -> list[str]:
        return list(self.api.keys())

    def analyze(self, name: str) -> InterfaceDef:
        """Analyze one interface with a fresh analyzer and scope tree."""
        if name not in self.api:
            raise ApiGenerationError(f"Unknown interface: {name}")
        return ApiAnalyzer(self.config).analyze_interface(name, self.api[name])

    def generate_interface(self, name: str) -> str:
        """Generate the source unit of one interface."""
        interface = self.analyze(name)
        return self.backend.generate(interface, self.generation_comment)

    def generate(self, names: list[str] | None = None) -> dict[str, str]:
        """
        Generate source units.

        Every unit is produced before anything is returned, so a resolution
        error in one interface fails the whole run.

        Args:
            names: Interfaces to generate, None for all of them in schema order

        Returns:
            File name -> generated code
        """
        units: dict[str, str] = {}
        for name in names if names is not None else self.interface_names():
            interface = self.analyze(name)
            units[self.backend.file_name(interface)] = self.backend.generate(interface, self.generation_comment)
            logger.debug("Generated %s", name)
        return units

    def write(self, output_dir: Path, names: list[str] | None = None) -> list[Path]:
        """
        Generate and write source units into a directory.

        Returns:
            Paths of the written files
        """
        units = self.generate(names)
        writer = AtomicWriter()
        output = self.config.output
        if output.mode != OutputMode.FORCE:
            existing = [name for name in units if (Path(output_dir) / name).exists()]
            if existing:
                raise OutputWriteError(f"Output files already exist in {output_dir}: {', '.join(existing)}. Use --force to overwrite.")

        written = []
        for file_name, code in units.items():
            path = Path(output_dir) / file_name
            if output.mode == OutputMode.FORCE:
                writer.write(path, code, validate=output.validate_before_write)
            else:
                writer.write_if_not_exists(path, code, validate=output.validate_before_write)
            written.append(path)
        return written
