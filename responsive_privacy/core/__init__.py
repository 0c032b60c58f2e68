"""Core decision logic: catalog, config resolution, visibility, redaction and transforms."""

from .attributes import AttributeCategory, AttributeDefinition, RiskTier
from .catalog import DEFAULT_CATALOG, AttributeCatalog
from .config import (
    CollectionConfig,
    PrivacyConfig,
    ResolvedConfig,
    define_config,
    resolve_config,
)
from .config_loader import ConfigLoader, config_from_dict, load_config
from .context import DisclosureContext, create_context, read_privacy_level
from .exceptions import (
    ConfigurationError,
    ConfigValidationError,
    LevelValidationError,
    ResponsivePrivacyError,
    ValidationError,
)
from .levels import (
    DEFAULT_LEVEL_DEFINITIONS,
    MAX_LEVEL,
    MIN_LEVEL,
    DisclosureLevel,
    LevelDefinition,
    parse_privacy_level,
    validate_level,
)
from .reporting import build_summary, render_summary, summarize
from .results import UNMANAGED, AuditSummary, CollectionAudit, EntryResult, FieldResult
from .strategies import OMIT, RedactionStrategy, Substitute, resolve_redaction
from .transformer import transform_collection, transform_collections, transform_entry
from .visibility import is_attribute_visible

__all__ = [
    # Levels
    "DisclosureLevel",
    "LevelDefinition",
    "DEFAULT_LEVEL_DEFINITIONS",
    "MIN_LEVEL",
    "MAX_LEVEL",
    "parse_privacy_level",
    "validate_level",
    # Attributes and catalog
    "AttributeCategory",
    "AttributeDefinition",
    "RiskTier",
    "AttributeCatalog",
    "DEFAULT_CATALOG",
    # Redaction
    "RedactionStrategy",
    "Substitute",
    "OMIT",
    "resolve_redaction",
    # Config
    "CollectionConfig",
    "PrivacyConfig",
    "ResolvedConfig",
    "define_config",
    "resolve_config",
    "ConfigLoader",
    "config_from_dict",
    "load_config",
    # Context
    "DisclosureContext",
    "create_context",
    "read_privacy_level",
    # Evaluation and transforms
    "is_attribute_visible",
    "transform_entry",
    "transform_collection",
    "transform_collections",
    # Results and reporting
    "UNMANAGED",
    "FieldResult",
    "EntryResult",
    "CollectionAudit",
    "AuditSummary",
    "summarize",
    "render_summary",
    "build_summary",
    # Exceptions
    "ResponsivePrivacyError",
    "ValidationError",
    "LevelValidationError",
    "ConfigurationError",
    "ConfigValidationError",
]
