"""Configuration file loading with schema validation."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .attributes import AttributeCategory, AttributeDefinition, RiskTier
from .config import CollectionConfig, PrivacyConfig
from .exceptions import ConfigurationError, ConfigValidationError, create_configuration_error
from .levels import MAX_LEVEL, MIN_LEVEL, LevelDefinition
from .strategies import RedactionStrategy

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".yaml", ".yml", ".json"}


def _validate_enum_value(value: Any, enum_cls: type, label: str) -> Any:
    try:
        enum_cls(value)
    except ValueError as e:
        valid = [member.value for member in enum_cls]
        raise ValueError(f"Invalid {label} '{value}'. Valid values: {valid}") from e
    return value


class LevelSchema(BaseModel):
    """Pydantic model for one level definition."""

    model_config = ConfigDict(extra="ignore")

    level: int = Field(..., ge=MIN_LEVEL, le=MAX_LEVEL, description="Disclosure level")
    name: str = Field(..., min_length=1, description="Level label")
    description: str = Field("", description="Level description")


class AttributeSchema(BaseModel):
    """Pydantic model for an attribute definition override."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Human-readable name")
    category: str = Field(..., description="Attribute category")
    risk: str = Field(
        ...,
        validation_alias=AliasChoices("risk", "risk_tier", "riskTier"),
        description="Risk tier",
    )
    threshold: int = Field(
        ..., ge=MIN_LEVEL, le=MAX_LEVEL, description="Minimum visible level"
    )
    redaction: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("redaction", "redaction_strategy", "redactionStrategy"),
        description="Redaction strategy when hidden",
    )
    redacted_value: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "redacted_value", "redactedValue", "replacement_value", "replacementValue"
        ),
        description="Replacement text for the replace strategy",
    )
    compliance_protected: bool = Field(
        False,
        validation_alias=AliasChoices("compliance_protected", "complianceProtected"),
        description="Warn when this attribute is hidden",
    )

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Any) -> Any:
        return _validate_enum_value(v, AttributeCategory, "category")

    @field_validator("risk")
    @classmethod
    def validate_risk(cls, v: Any) -> Any:
        return _validate_enum_value(v, RiskTier, "risk tier")

    @field_validator("redaction")
    @classmethod
    def validate_redaction(cls, v: Any) -> Any:
        if v is not None:
            return _validate_enum_value(v, RedactionStrategy, "redaction strategy")
        return v


class CollectionSchema(BaseModel):
    """Pydantic model for a collection's field mapping."""

    model_config = ConfigDict(extra="ignore")

    fields: dict[str, str] = Field(default_factory=dict, description="Field to attribute id")


class ConfigFileSchema(BaseModel):
    """Pydantic model for the configuration file."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    levels: Optional[list[LevelSchema]] = Field(
        None,
        validation_alias=AliasChoices("levels", "level_definitions", "levelDefinitions"),
        description="Level definitions replacing the defaults",
    )
    attributes: Optional[dict[str, AttributeSchema]] = Field(
        None,
        validation_alias=AliasChoices("attributes", "attribute_catalog", "attributeCatalog"),
        description="Attribute overrides keyed by id",
    )
    collections: dict[str, CollectionSchema] = Field(
        ...,
        validation_alias=AliasChoices("collections", "collection_configs", "collectionConfigs"),
        description="Collection name to field mapping",
    )

    @field_validator("collections", mode="before")
    @classmethod
    def normalize_collections(cls, v: Any) -> Any:
        """Accept a bare field mapping in place of {fields: {...}}."""
        if not isinstance(v, dict):
            return v
        normalized = {}
        for name, collection in v.items():
            if isinstance(collection, dict) and "fields" not in collection:
                collection = {"fields": collection}
            normalized[name] = collection
        return normalized

    @field_validator("levels")
    @classmethod
    def validate_unique_levels(cls, v: Any) -> Any:
        if v is not None:
            seen = [level.level for level in v]
            duplicates = sorted({level for level in seen if seen.count(level) > 1})
            if duplicates:
                raise ValueError(f"Duplicate level definitions for levels: {duplicates}")
        return v


def schema_to_config(schema: ConfigFileSchema) -> PrivacyConfig:
    """Convert a validated schema to a PrivacyConfig."""
    levels = None
    if schema.levels is not None:
        levels = tuple(
            LevelDefinition(level=item.level, name=item.name, description=item.description)
            for item in schema.levels
        )

    attributes = None
    if schema.attributes is not None:
        attributes = {
            attribute_id: AttributeDefinition(
                id=attribute_id,
                name=item.name,
                category=AttributeCategory(item.category),
                risk=RiskTier(item.risk),
                threshold=item.threshold,
                redaction=RedactionStrategy(item.redaction or RedactionStrategy.OMIT.value),
                redacted_value=item.redacted_value,
                compliance_protected=item.compliance_protected,
            )
            for attribute_id, item in schema.attributes.items()
        }

    collections = {
        name: CollectionConfig(fields=dict(item.fields))
        for name, item in schema.collections.items()
    }

    return PrivacyConfig(collections=collections, levels=levels, attributes=attributes)


def config_from_dict(
    data: Any, source: Optional[Union[str, Path]] = None
) -> PrivacyConfig:
    """
    Validate and convert a configuration mapping.

    Raises:
        ConfigValidationError: If the data does not match the schema
        ConfigurationError: If no collections are configured
    """
    label = f" in {source}" if source is not None else ""

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Configuration{label} must be a mapping, got {type(data).__name__}",
            config_file=str(source) if source is not None else None,
        )

    try:
        schema = ConfigFileSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigValidationError(
            f"Configuration validation failed{label}: {e}",
            config_file=str(source) if source is not None else None,
        ) from e

    if not schema.collections:
        raise create_configuration_error(
            f"Configuration{label} must map at least one collection",
            config_file=source,
            section="collections",
        )

    return schema_to_config(schema)


class ConfigLoader:
    """
    Loads operator configuration from YAML or JSON files.

    Examples:
        >>> loader = ConfigLoader()
        >>> config = loader.load_config("responsive-privacy.yaml")
        >>> errors = loader.validate_config_file("broken.yaml")
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            base_path: Base directory for resolving relative config paths
        """
        self.base_path = base_path or Path.cwd()

    def _resolve_path(self, config_path: Union[str, Path]) -> Path:
        config_path = Path(config_path)
        if not config_path.is_absolute():
            config_path = self.base_path / config_path
        return config_path

    def read_file(self, config_path: Union[str, Path]) -> Any:
        """
        Read raw data from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigValidationError: If the file cannot be parsed
        """
        config_path = self._resolve_path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ConfigValidationError(
                f"Unsupported config format: {config_path.suffix}",
                config_file=str(config_path),
            )

        try:
            with open(config_path, encoding="utf-8") as f:
                if suffix == ".json":
                    return json.load(f)
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in {config_path}: {e}", config_file=str(config_path)
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigValidationError(
                f"Invalid JSON in {config_path}: {e}", config_file=str(config_path)
            ) from e

    def load_config(self, config_path: Union[str, Path]) -> PrivacyConfig:
        """
        Load operator configuration from a file.

        Args:
            config_path: Path to a .yaml, .yml or .json config file

        Returns:
            Validated PrivacyConfig

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigValidationError: If parsing or schema validation fails
            ConfigurationError: If no collections are configured
        """
        config_path = self._resolve_path(config_path)
        data = self.read_file(config_path)
        config = config_from_dict(data, source=config_path)
        logger.debug(
            f"Loaded configuration from {config_path}: "
            f"{len(config.collections)} collections, "
            f"{len(config.attributes or {})} attribute overrides"
        )
        return config

    def validate_config_file(self, config_path: Union[str, Path]) -> list[str]:
        """
        Validate a config file and return any validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            self.load_config(config_path)
            return []
        except (ConfigurationError, FileNotFoundError) as e:
            return [str(e)]


def load_config(config_path: Union[str, Path]) -> PrivacyConfig:
    """Load configuration from a file with a default loader."""
    return ConfigLoader().load_config(config_path)
