"""Content transformer.

Takes a record plus a disclosure context and returns the record with fields
hidden or redacted according to the attribute thresholds. This is what the
host build calls for every content entry.
"""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from .config import CollectionConfig
from .context import DisclosureContext
from .results import UNMANAGED, EntryResult, FieldResult
from .strategies import RedactionStrategy, resolve_redaction
from .visibility import is_attribute_visible

logger = logging.getLogger(__name__)


def compliance_warning(
    attribute_name: str, attribute_id: str, level: int, threshold: int
) -> str:
    return (
        f'Compliance-protected attribute "{attribute_name}" ({attribute_id}) '
        f"would be hidden at Level {level} (threshold: {threshold}). "
        f"Requires legal review before removal."
    )


def unknown_attribute_warning(field_name: str, attribute_id: str) -> str:
    return (
        f'Field "{field_name}" mapped to unknown attribute "{attribute_id}". '
        f"Passing through."
    )


def transform_entry(
    collection_name: str,
    data: Mapping[str, Any],
    context: DisclosureContext,
) -> EntryResult:
    """
    Transform a single record according to the disclosure context.

    Args:
        collection_name: Name of the content collection, e.g. "team"
        data: The raw record (field name to value)
        context: The disclosure context for this build

    Returns:
        EntryResult with the filtered record and the per-field audit trail
    """
    collection = context.config.collection(collection_name)

    if collection is None:
        return _pass_through(data)

    return _apply_privacy(data, collection, context)


def _pass_through(data: Mapping[str, Any]) -> EntryResult:
    """Result for a collection with no configuration: nothing is touched."""
    return EntryResult(
        data=dict(data),
        fields=tuple(
            FieldResult(field=name, attribute_id=UNMANAGED, visible=True, value=value)
            for name, value in data.items()
        ),
    )


def _apply_privacy(
    data: Mapping[str, Any],
    collection: CollectionConfig,
    context: DisclosureContext,
) -> EntryResult:
    attributes = context.config.attributes
    level = context.current_level

    filtered: dict[str, Any] = {}
    fields: list[FieldResult] = []
    hidden_fields: list[str] = []
    warnings: list[str] = []
    configuration_warnings: list[str] = []

    for field_name, value in data.items():
        attribute_id = collection.attribute_for(field_name)

        if attribute_id is None:
            filtered[field_name] = value
            fields.append(
                FieldResult(field=field_name, attribute_id=UNMANAGED, visible=True, value=value)
            )
            continue

        attribute = attributes.get(attribute_id)

        if attribute is None:
            message = unknown_attribute_warning(field_name, attribute_id)
            logger.warning(message)
            configuration_warnings.append(message)
            filtered[field_name] = value
            fields.append(
                FieldResult(field=field_name, attribute_id=attribute_id, visible=True, value=value)
            )
            continue

        if is_attribute_visible(attribute_id, level, attributes):
            filtered[field_name] = value
            fields.append(
                FieldResult(field=field_name, attribute_id=attribute_id, visible=True, value=value)
            )
            continue

        # Protected attributes are still hidden; the warning is advisory
        if attribute.compliance_protected:
            warnings.append(
                compliance_warning(attribute.name, attribute_id, level, attribute.threshold)
            )

        substitute = resolve_redaction(attribute)

        if substitute.strategy == RedactionStrategy.REPLACE:
            filtered[field_name] = substitute.value
        fields.append(
            FieldResult(
                field=field_name,
                attribute_id=attribute_id,
                visible=False,
                value=substitute.value,
                redaction_applied=substitute.strategy,
            )
        )
        hidden_fields.append(field_name)

    return EntryResult(
        data=filtered,
        fields=tuple(fields),
        hidden_fields=tuple(hidden_fields),
        warnings=tuple(warnings),
        configuration_warnings=tuple(configuration_warnings),
    )


def transform_collection(
    collection_name: str,
    entries: Iterable[Mapping[str, Any]],
    context: DisclosureContext,
    max_workers: Optional[int] = None,
) -> list[EntryResult]:
    """
    Transform every record of a collection, preserving input order.

    Records are independent, so with max_workers > 1 they are evaluated on a
    thread pool sharing the read-only context.

    Args:
        collection_name: Name of the content collection
        entries: The raw records
        context: The disclosure context for this build
        max_workers: Worker threads to use; None or 1 runs inline

    Returns:
        One EntryResult per record, in input order
    """
    records = list(entries)

    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be a positive integer or None")

    if not max_workers or max_workers == 1 or len(records) < 2:
        results = [transform_entry(collection_name, record, context) for record in records]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(
                executor.map(
                    lambda record: transform_entry(collection_name, record, context),
                    records,
                )
            )

    logger.debug(
        f"Transformed {len(results)} entries of '{collection_name}' "
        f"at level {context.current_level}"
    )
    return results


def transform_collections(
    entries_by_collection: Mapping[str, Iterable[Mapping[str, Any]]],
    context: DisclosureContext,
    max_workers: Optional[int] = None,
) -> dict[str, list[EntryResult]]:
    """Transform several collections, keyed and ordered as given."""
    return {
        collection_name: transform_collection(
            collection_name, entries, context, max_workers=max_workers
        )
        for collection_name, entries in entries_by_collection.items()
    }
