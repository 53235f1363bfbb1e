"""
Base class for emission backends.

Defines the interface that all output backends must implement. Backends
consume a fully resolved schema set and never modify it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.dependency_analyzer import DependencyAnalyzer
from ..analyzer.type_resolver import dto_name_from_type
from ..config import BuilderConfig
from ..schema.nodes import DtoDefinition, SchemaSet


class DtoBackend(ABC):
    """Abstract base class for emission backends."""

    # Template directory name; backends without templates leave it empty
    TEMPLATE_LANG: str = ""

    # Output file name
    FILE_NAME: str = ""

    def __init__(self, config: BuilderConfig | None = None):
        """
        Initialize the backend.

        Args:
            config: The configuration the schema set was built with
        """
        self.config = config or BuilderConfig()
        if self.TEMPLATE_LANG:
            self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def generate(self, schema_set: SchemaSet, generation_comment: str = "") -> str:
        """
        Generate output from a resolved schema set.

        Args:
            schema_set: The resolved DTOs
            generation_comment: Command line that produced the output

        Returns:
            Generated output as a string
        """

    def write(self, schema_set: SchemaSet, output_dir: str | Path, generation_comment: str = "") -> Path:
        """Generate into ``FILE_NAME`` inside ``output_dir`` and return the written path."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.FILE_NAME
        path.write_text(self.generate(schema_set, generation_comment), encoding="utf-8")
        return path

    def type_name(self, dto_name: str) -> str:
        """Flat output name of a DTO: ``Sub/Item`` -> ``SubItemDto``."""
        return dto_name.replace("/", "") + self.config.suffix

    def referenced_dto(self, type_string: str | None, schema_set: SchemaSet) -> DtoDefinition | None:
        """Return the DTO a type string refers to, if any."""
        if not type_string:
            return None
        name = dto_name_from_type(type_string, schema_set, self.config.suffix)
        return schema_set[name] if name else None

    def sorted_dtos(self, schema_set: SchemaSet) -> list[DtoDefinition]:
        """Return DTOs with dependencies before dependents, otherwise in schema order."""
        graph = DependencyAnalyzer(self.config.suffix).build_graph(schema_set)
        seen: set[str] = set()
        ordered: list[str] = []

        def visit(name: str) -> None:
            if name in seen:
                return
            seen.add(name)
            for dependency in graph.get(name, []):
                visit(dependency)
            ordered.append(name)

        for name in graph:
            visit(name)
        return [schema_set[name] for name in ordered]
