"""Helpers for host build pipelines working with content collection entries.

Entries are mappings with a ``data`` key holding the record fields, plus any
other keys the host attaches (id, slug, body, ...). The helpers return copies
of the entries with ``data`` filtered and the transform result attached as
``_privacy`` so templates can show what was hidden.

Usage in a build step::

    from responsive_privacy.helpers import filter_collection

    team = filter_collection("team", load_entries("team"), config)
    for member in team:
        render(member["data"], hidden=member["_privacy"].hidden_fields)
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from responsive_privacy.core.config import PrivacyConfig
from responsive_privacy.core.context import create_context
from responsive_privacy.core.levels import DisclosureLevel
from responsive_privacy.core.transformer import transform_entry
from responsive_privacy.engine import PrivacyEngine, PrivacyStatus

PRIVACY_KEY = "_privacy"


def _filtered_copy(
    collection_name: str, entry: Mapping[str, Any], context: Any
) -> dict[str, Any]:
    if "data" not in entry:
        raise KeyError(f"Entry in collection '{collection_name}' has no 'data' field")
    result = transform_entry(collection_name, entry["data"], context)
    return {**entry, "data": result.data, PRIVACY_KEY: result}


def filter_entry(
    collection_name: str,
    entry: Mapping[str, Any],
    config: PrivacyConfig,
    level: Optional[DisclosureLevel] = None,
) -> dict[str, Any]:
    """
    Filter a single content entry's data fields.

    Args:
        collection_name: Name of the content collection
        entry: Entry with a ``data`` mapping
        config: Operator configuration
        level: Disclosure level; read from the environment when None

    Returns:
        Copy of the entry with filtered ``data`` and the EntryResult under
        ``_privacy``
    """
    context = create_context(config, level)
    return _filtered_copy(collection_name, entry, context)


def filter_collection(
    collection_name: str,
    entries: Iterable[Mapping[str, Any]],
    config: PrivacyConfig,
    level: Optional[DisclosureLevel] = None,
) -> list[dict[str, Any]]:
    """Filter every entry of a collection with one shared context."""
    context = create_context(config, level)
    return [_filtered_copy(collection_name, entry, context) for entry in entries]


def should_show(
    collection_name: str,
    field_name: str,
    config: PrivacyConfig,
    level: Optional[DisclosureLevel] = None,
) -> bool:
    """
    Check if a collection field would be visible, for conditional rendering.

    Unknown collections, unmapped fields and unknown attribute ids are visible.
    """
    return PrivacyEngine(config, level=level).is_field_visible(collection_name, field_name)


def get_privacy_status(
    config: PrivacyConfig, level: Optional[DisclosureLevel] = None
) -> PrivacyStatus:
    """Get the current disclosure level and its label for display."""
    return PrivacyEngine(config, level=level).status()
