"""
Inheritance (``extends``) resolution and validation.
"""

from __future__ import annotations

from ...dto import ABSTRACT_DTO, ABSTRACT_IMMUTABLE_DTO, AbstractDto, AbstractImmutableDto
from ...errors import InheritanceError
from ...logging import get_logger
from ..schema.nodes import DtoDefinition, SchemaSet
from .type_classifier import resolve_class

logger = get_logger("extends_resolver")

DEFAULT_BASES = (ABSTRACT_DTO, ABSTRACT_IMMUTABLE_DTO)


class ExtendsResolver:
    """Resolves ``extends`` targets and checks mutability compatibility."""

    def __init__(self, suffix: str = "Dto"):
        self.suffix = suffix

    def resolve(self, schema_set: SchemaSet) -> SchemaSet:
        """
        Resolve the extends target of every DTO.

        Internal targets (other DTOs of the set) get the class suffix;
        external targets must be importable DTO base classes.

        Raises:
            InheritanceError: Missing target or mutability mismatch
        """
        for dto in schema_set.values():
            self.resolve_extends(dto, schema_set)
        return schema_set

    def resolve_extends(self, dto: DtoDefinition, schema_set: SchemaSet) -> DtoDefinition:
        extends = dto.extends
        if not extends or extends in DEFAULT_BASES:
            return dto

        if extends in schema_set:
            return self.resolve_internal_extends(dto, extends, schema_set)
        return self.resolve_external_extends(dto, extends)

    def resolve_internal_extends(self, dto: DtoDefinition, extends: str, schema_set: SchemaSet) -> DtoDefinition:
        parent = schema_set[extends]
        dto.extends = extends + self.suffix

        if not dto.immutable and parent.immutable:
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: cannot extend immutable DTO `{extends}`.",
                dto_name=dto.name,
                hint=f"Either make `{dto.name}` immutable, or extend a mutable DTO instead.",
            )

        if dto.immutable and not parent.immutable:
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: immutable DTO cannot extend mutable DTO `{extends}`.",
                dto_name=dto.name,
                hint=f"Either make `{dto.name}` mutable, or make `{extends}` immutable.",
            )

        logger.debug("%s extends DTO %s", dto.name, extends)
        return dto

    def resolve_external_extends(self, dto: DtoDefinition, extends: str) -> DtoDefinition:
        cls = resolve_class(extends)
        if cls is None:
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: class `{extends}` does not exist.",
                dto_name=dto.name,
                hint="Check the class name spelling and ensure the class is importable.",
            )

        if not issubclass(cls, (AbstractDto, AbstractImmutableDto)):
            expected = ABSTRACT_IMMUTABLE_DTO if dto.immutable else ABSTRACT_DTO
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: `{extends}` must extend {expected}.",
                dto_name=dto.name,
                hint="The parent class should be a DTO class extending the appropriate base.",
            )

        if dto.immutable and not issubclass(cls, AbstractImmutableDto):
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: `{extends}` is not immutable.",
                dto_name=dto.name,
                hint="Immutable DTOs must extend other immutable DTOs or AbstractImmutableDto.",
            )

        if not dto.immutable and not issubclass(cls, AbstractDto):
            raise InheritanceError(
                f"Invalid `extends` attribute for `{dto.name}` DTO: `{extends}` is immutable.",
                dto_name=dto.name,
                hint=f"Mutable DTOs cannot extend immutable DTOs. Either make `{dto.name}` immutable or change the parent.",
            )

        logger.debug("%s extends class %s", dto.name, extends)
        return dto

    def resolve_namespace_paths(self, schema_set: SchemaSet, namespace: str) -> SchemaSet:
        """
        Move ``Sub/Leaf`` DTOs into sub-namespaces.

        The class name becomes ``Leaf`` in ``<namespace>\\Dto\\Sub``, and
        ``/`` extends targets become fully qualified class references.
        """
        for dto in schema_set.values():
            if "/" in dto.class_name:
                *pieces, dto.class_name = dto.class_name.split("/")
                dto.namespace += "\\" + "\\".join(pieces)

            if dto.extends and "/" in dto.extends:
                pieces = dto.extends.split("/")
                dto.extends = f"\\{namespace}\\Dto\\" + "\\".join(pieces)

        return schema_set
