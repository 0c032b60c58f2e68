"""Visibility decision rule."""

from collections.abc import Mapping

from .attributes import AttributeDefinition
from .levels import DisclosureLevel


def is_attribute_visible(
    attribute_id: str,
    current_level: DisclosureLevel,
    attributes: Mapping[str, AttributeDefinition],
) -> bool:
    """
    Check if an attribute is visible at the given disclosure level.

    Unknown attribute ids are visible: a missing catalog entry must not break
    a build, so the rule fails open rather than over-redacting.

    Args:
        attribute_id: Attribute id to evaluate, e.g. "ID-01"
        current_level: The build's disclosure level
        attributes: Catalog to look the id up in

    Returns:
        True if the level meets the attribute's threshold or the id is unknown
    """
    attribute = attributes.get(attribute_id)
    if attribute is None:
        return True
    return attribute.is_visible_at(current_level)
