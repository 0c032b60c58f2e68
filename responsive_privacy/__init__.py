"""Responsive Privacy: disclosure-level filtering for structured content.

Evaluates each field of a content record against an attribute sensitivity
catalog and a target disclosure level (0-4), hiding or substituting what the
level does not allow and keeping an audit trail of every decision.
"""

__version__ = "0.1.0"
__author__ = "Responsive Privacy Team"
__email__ = "contact@example.com"

from .core import (
    DEFAULT_CATALOG,
    DEFAULT_LEVEL_DEFINITIONS,
    MAX_LEVEL,
    MIN_LEVEL,
    OMIT,
    AttributeCatalog,
    AttributeCategory,
    AttributeDefinition,
    AuditSummary,
    CollectionAudit,
    CollectionConfig,
    ConfigLoader,
    ConfigurationError,
    ConfigValidationError,
    DisclosureContext,
    DisclosureLevel,
    EntryResult,
    FieldResult,
    LevelDefinition,
    LevelValidationError,
    PrivacyConfig,
    RedactionStrategy,
    ResolvedConfig,
    ResponsivePrivacyError,
    RiskTier,
    Substitute,
    build_summary,
    create_context,
    define_config,
    is_attribute_visible,
    load_config,
    parse_privacy_level,
    read_privacy_level,
    resolve_config,
    resolve_redaction,
    summarize,
    transform_collection,
    transform_collections,
    transform_entry,
)
from .engine import PrivacyEngine, PrivacyStatus
from .helpers import filter_collection, filter_entry, get_privacy_status, should_show

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    # High-level API
    "PrivacyEngine",
    "PrivacyStatus",
    "filter_entry",
    "filter_collection",
    "should_show",
    "get_privacy_status",
    # Levels
    "DisclosureLevel",
    "LevelDefinition",
    "DEFAULT_LEVEL_DEFINITIONS",
    "MIN_LEVEL",
    "MAX_LEVEL",
    "parse_privacy_level",
    "read_privacy_level",
    # Catalog
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
    "ConfigLoader",
    "define_config",
    "resolve_config",
    "load_config",
    "DisclosureContext",
    "create_context",
    # Transforms and reporting
    "is_attribute_visible",
    "transform_entry",
    "transform_collection",
    "transform_collections",
    "FieldResult",
    "EntryResult",
    "CollectionAudit",
    "AuditSummary",
    "summarize",
    "build_summary",
    # Exceptions
    "ResponsivePrivacyError",
    "LevelValidationError",
    "ConfigurationError",
    "ConfigValidationError",
]
