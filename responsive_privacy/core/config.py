"""Operator configuration and its resolution against the default taxonomy."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from .attributes import AttributeDefinition
from .catalog import DEFAULT_CATALOG, AttributeCatalog
from .levels import DEFAULT_LEVEL_DEFINITIONS, DisclosureLevel, LevelDefinition, find_level_definition


@dataclass(frozen=True)
class CollectionConfig:
    """
    Field-to-attribute mapping for one content collection.

    Keys are field names as they appear in the records, values are attribute
    ids from the catalog. Several fields may point at the same attribute.
    Fields missing from the mapping are unmanaged and always pass through.
    """

    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for field_name, attribute_id in self.fields.items():
            if not isinstance(field_name, str) or not isinstance(attribute_id, str):
                raise ValueError(
                    f"Field mapping entries must map strings to strings, "
                    f"got {field_name!r}: {attribute_id!r}"
                )
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def attribute_for(self, field_name: str) -> Optional[str]:
        """Get the attribute id mapped to a field, or None when unmanaged."""
        return self.fields.get(field_name) or None

    def to_dict(self) -> dict[str, Any]:
        return {"fields": dict(self.fields)}


@dataclass(frozen=True)
class PrivacyConfig:
    """
    Configuration supplied by the build operator.

    Attributes:
        collections: Collection name to field mapping. This is the part most
            operators need to write; there is no default.
        levels: Level definitions replacing the five defaults, if given
        attributes: Attribute definitions keyed by id, each replacing the
            default entry with the same id or adding a new one

    Examples:
        >>> config = PrivacyConfig(
        ...     collections={
        ...         "team": CollectionConfig(fields={"name": "ID-01", "email": "CV-01"}),
        ...     }
        ... )

        >>> # From the file shape
        >>> config = PrivacyConfig.from_dict({
        ...     "collections": {"team": {"fields": {"name": "ID-01"}}},
        ...     "attributes": {"ID-01": {"name": "Full Name", "category": "identity",
        ...                              "risk": "high", "threshold": 3}},
        ... })
    """

    collections: Mapping[str, CollectionConfig] = field(default_factory=dict)
    levels: Optional[tuple[LevelDefinition, ...]] = field(default=None)
    attributes: Optional[Mapping[str, AttributeDefinition]] = field(default=None)

    def __post_init__(self) -> None:
        collections = {
            name: value if isinstance(value, CollectionConfig) else CollectionConfig(fields=value)
            for name, value in self.collections.items()
        }
        object.__setattr__(self, "collections", MappingProxyType(collections))

        if self.levels is not None:
            object.__setattr__(self, "levels", tuple(self.levels))

        if self.attributes is not None:
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def to_dict(self) -> dict[str, Any]:
        """Convert config to the dictionary shape accepted by from_dict."""
        data: dict[str, Any] = {
            "collections": {
                name: collection.to_dict() for name, collection in self.collections.items()
            }
        }
        if self.levels is not None:
            data["levels"] = [definition.to_dict() for definition in self.levels]
        if self.attributes is not None:
            data["attributes"] = {
                attribute_id: attr.to_dict() for attribute_id, attr in self.attributes.items()
            }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrivacyConfig":
        """Create config from its dictionary form, validating the shape.

        Raises:
            ConfigValidationError: If the data does not match the schema
        """
        from .config_loader import config_from_dict

        return config_from_dict(data)


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully populated configuration shared read-only by one build."""

    levels: tuple[LevelDefinition, ...]
    attributes: AttributeCatalog
    collections: Mapping[str, CollectionConfig]

    def level_definition(self, level: DisclosureLevel) -> Optional[LevelDefinition]:
        return find_level_definition(self.levels, level)

    def collection(self, name: str) -> Optional[CollectionConfig]:
        return self.collections.get(name)


def define_config(config: PrivacyConfig) -> PrivacyConfig:
    """Identity helper so config modules read as declarations."""
    return config


def resolve_config(config: PrivacyConfig) -> ResolvedConfig:
    """
    Resolve operator config into a fully populated config.

    Operator attributes replace default entries wholesale, operator levels
    replace the default level list, and collections are taken as given.
    No validation happens here beyond what the dataclasses enforce.
    """
    return ResolvedConfig(
        levels=config.levels if config.levels is not None else DEFAULT_LEVEL_DEFINITIONS,
        attributes=DEFAULT_CATALOG.merged(config.attributes),
        collections=config.collections,
    )
