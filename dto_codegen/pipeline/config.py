"""
Configuration for the DTO build pipeline.

Everything that would otherwise be process-wide state (collection class,
associative key type, naming suffix) is carried explicitly here and passed
to the pipeline components at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BuilderConfig:
    """Configuration options for building the DTO schema set."""

    # Root namespace; generated classes live in "<namespace>\Dto"
    namespace: str = "App"

    # Appended to every DTO name to form its class name
    suffix: str = "Dto"

    # Default mutability for DTOs that do not set "immutable"
    immutable: bool = False

    # Emit scalar type hints and return types
    scalar_and_return_types: bool = True

    # Collection class used when a field is a collection without "collectionType"
    default_collection_type: str = "\\collections\\UserList"

    # Key type of associative collections (non-associative ones use int)
    associative_key_type: str = "string"

    # Keep the full field definitions as metadata instead of the minimal projection
    debug: bool = False

    # Accept a DTO referencing itself through a nullable field (trees, linked lists)
    allow_nullable_self_reference: bool = False

    @staticmethod
    def from_dict(d: dict) -> BuilderConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = BuilderConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "namespace": self.namespace,
            "suffix": self.suffix,
            "immutable": self.immutable,
            "scalar_and_return_types": self.scalar_and_return_types,
            "default_collection_type": self.default_collection_type,
            "associative_key_type": self.associative_key_type,
            "debug": self.debug,
            "allow_nullable_self_reference": self.allow_nullable_self_reference,
        }
