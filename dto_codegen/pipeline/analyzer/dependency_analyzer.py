"""
Dependency graph construction and cycle detection across DTOs.
"""

from __future__ import annotations

from ...dto import ABSTRACT_DTO, ABSTRACT_IMMUTABLE_DTO
from ...errors import CycleError
from ...logging import get_logger
from ..schema.nodes import DtoDefinition, FieldDefinition, SchemaSet
from .type_resolver import dto_name_from_type

logger = get_logger("dependency_analyzer")

# DTO name -> names of the DTOs it depends on, in first-seen order
DependencyGraph = dict[str, list[str]]


class DependencyAnalyzer:
    """Analyzes DTO dependencies and detects circular references."""

    def __init__(self, suffix: str = "Dto", allow_nullable_self_reference: bool = False):
        self.suffix = suffix
        self.allow_nullable_self_reference = allow_nullable_self_reference

    def analyze(self, schema_set: SchemaSet) -> DependencyGraph:
        """
        Check the DTO set for circular dependencies.

        Every node is explored depth-first with the current path on a
        stack. Nodes explored without finding a cycle are sealed and never
        visited again, which keeps diamond-shaped graphs linear.

        Args:
            schema_set: All DTOs of the run

        Returns:
            The dependency graph

        Raises:
            CycleError: A DTO depends on itself, directly or transitively
        """
        graph = self.build_graph(schema_set)
        sealed: set[str] = set()

        for name in graph:
            self._detect_cycle(name, graph, [], sealed)

        logger.debug("Dependency graph of %d DTOs is acyclic", len(graph))
        return graph

    def build_graph(self, schema_set: SchemaSet) -> DependencyGraph:
        """Build the adjacency list of the DTO set."""
        return {name: self.extract_dependencies(dto, schema_set) for name, dto in schema_set.items()}

    def extract_dependencies(self, dto: DtoDefinition, schema_set: SchemaSet) -> list[str]:
        dependencies: list[str] = []

        def add(name: str | None) -> None:
            if name and name not in dependencies:
                dependencies.append(name)

        for field in dto.fields.values():
            targets = [
                dto_name_from_type(field.type, schema_set, self.suffix),
                dto_name_from_type(field.singular_type, schema_set, self.suffix) if field.singular_type else None,
                field.dto if field.dto in schema_set else None,
            ]
            for target in targets:
                if target == dto.name and self._is_optional_self_reference(field):
                    logger.debug("Ignoring nullable self reference %s.%s", dto.name, field.name)
                    continue
                add(target)

        if dto.extends and dto.extends not in (ABSTRACT_DTO, ABSTRACT_IMMUTABLE_DTO):
            add(dto_name_from_type(dto.extends, schema_set, self.suffix))

        return dependencies

    def get_all_dependencies(self, name: str, schema_set: SchemaSet) -> list[str]:
        """Return every DTO ``name`` depends on, directly or transitively, in discovery order."""
        graph = self.build_graph(schema_set)
        visited: dict[str, None] = {}
        self._collect(name, graph, visited)
        visited.pop(name, None)
        return list(visited)

    def _is_optional_self_reference(self, field: FieldDefinition) -> bool:
        if not self.allow_nullable_self_reference:
            return False
        if field.collection or field.is_array:
            return field.singular_nullable
        return field.nullable

    def _detect_cycle(self, node: str, graph: DependencyGraph, path: list[str], sealed: set[str]) -> None:
        if node in sealed:
            return

        if node in path:
            cycle = path[path.index(node) :] + [node]
            raise CycleError(
                f"Circular dependency detected: {' -> '.join(cycle)}",
                path=cycle,
                hint="Consider making one of the fields nullable or using lazy loading to break the cycle.",
            )

        path.append(node)
        for dependency in graph.get(node, []):
            self._detect_cycle(dependency, graph, path, sealed)
        path.pop()

        sealed.add(node)

    def _collect(self, node: str, graph: DependencyGraph, visited: dict[str, None]) -> None:
        if node in visited:
            return
        visited[node] = None
        for dependency in graph.get(node, []):
            self._collect(dependency, graph, visited)
