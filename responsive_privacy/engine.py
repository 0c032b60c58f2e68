"""PrivacyEngine - high-level API for filtering content at one disclosure level."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from responsive_privacy.core.config import PrivacyConfig
from responsive_privacy.core.config_loader import load_config
from responsive_privacy.core.context import DisclosureContext, create_context
from responsive_privacy.core.levels import DisclosureLevel
from responsive_privacy.core.reporting import render_summary, summarize
from responsive_privacy.core.results import AuditSummary, EntryResult
from responsive_privacy.core.strategies import resolve_redaction
from responsive_privacy.core.transformer import (
    transform_collection,
    transform_collections,
    transform_entry,
)
from responsive_privacy.core.visibility import is_attribute_visible


@dataclass(frozen=True)
class PrivacyStatus:
    """Current disclosure level and its metadata, for display in templates."""

    level: DisclosureLevel
    name: str
    description: str
    is_reduced: bool


class PrivacyEngine:
    """High-level API bound to one build's config and disclosure level.

    Resolves the configuration once and reuses the context for every call.

    Examples:
        # Level read from PRIVACY_LEVEL (full transparency when unset)
        engine = PrivacyEngine(config)
        team = engine.transform_collection("team", records)
        print(engine.build_summary({"team": team}))

        # Explicit level, records evaluated on four threads
        engine = PrivacyEngine.from_file("responsive-privacy.yaml", level=1, max_workers=4)
    """

    def __init__(
        self,
        config: PrivacyConfig,
        level: Optional[DisclosureLevel] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize PrivacyEngine.

        Args:
            config: Operator configuration
            level: Target disclosure level; read from the environment when None
            max_workers: Worker threads for collection transforms
        """
        self._config = config
        self._context = create_context(config, level)
        self._max_workers = max_workers

    @classmethod
    def from_file(
        cls,
        config_path: Union[str, Path],
        level: Optional[DisclosureLevel] = None,
        max_workers: Optional[int] = None,
    ) -> "PrivacyEngine":
        """Create an engine from a YAML or JSON config file."""
        return cls(load_config(config_path), level=level, max_workers=max_workers)

    @property
    def config(self) -> PrivacyConfig:
        return self._config

    @property
    def context(self) -> DisclosureContext:
        return self._context

    @property
    def level(self) -> DisclosureLevel:
        return self._context.current_level

    @property
    def level_name(self) -> str:
        return self._context.level_name

    def transform_entry(self, collection_name: str, data: Mapping[str, Any]) -> EntryResult:
        return transform_entry(collection_name, data, self._context)

    def transform_collection(
        self, collection_name: str, entries: Iterable[Mapping[str, Any]]
    ) -> list[EntryResult]:
        return transform_collection(
            collection_name, entries, self._context, max_workers=self._max_workers
        )

    def transform_collections(
        self, entries_by_collection: Mapping[str, Iterable[Mapping[str, Any]]]
    ) -> dict[str, list[EntryResult]]:
        return transform_collections(
            entries_by_collection, self._context, max_workers=self._max_workers
        )

    def summarize(
        self, results_by_collection: Mapping[str, Sequence[EntryResult]]
    ) -> AuditSummary:
        return summarize(results_by_collection, self._context)

    def build_summary(
        self, results_by_collection: Mapping[str, Sequence[EntryResult]]
    ) -> str:
        return render_summary(self.summarize(results_by_collection))

    def is_visible(self, attribute_id: str) -> bool:
        """Check if an attribute id is visible at the engine's level."""
        return is_attribute_visible(
            attribute_id, self._context.current_level, self._context.config.attributes
        )

    def is_field_visible(self, collection_name: str, field_name: str) -> bool:
        """Check if a collection field is visible; unknown fields are visible."""
        collection = self._context.config.collection(collection_name)
        if collection is None:
            return True

        attribute_id = collection.attribute_for(field_name)
        if attribute_id is None:
            return True

        return self.is_visible(attribute_id)

    def redacted_value_for(self, attribute_id: str) -> Optional[str]:
        """Get the replacement text for an attribute, or None if it is omitted or unknown."""
        attribute = self._context.config.attributes.get(attribute_id)
        if attribute is None:
            return None
        return resolve_redaction(attribute).value

    def status(self) -> PrivacyStatus:
        return PrivacyStatus(
            level=self._context.current_level,
            name=self._context.level_name,
            description=self._context.level_description,
            is_reduced=self._context.is_reduced,
        )
