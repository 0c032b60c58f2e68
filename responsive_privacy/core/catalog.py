"""Attribute catalog and the default attribution taxonomy.

The attribute ids (ID-01, CV-01, ...) follow the "Responsive Transparency"
attribution taxonomy. Organizations override individual entries in their
config; an override replaces the whole entry.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Optional

from .attributes import AttributeCategory, AttributeDefinition, RiskTier
from .levels import DisclosureLevel
from .strategies import RedactionStrategy


class AttributeCatalog(Mapping[str, AttributeDefinition]):
    """
    Read-only mapping from attribute id to its definition.

    Instances are never mutated; merging overrides returns a new catalog.

    Examples:
        >>> catalog = AttributeCatalog([full_name, photo])
        >>> catalog["ID-01"].threshold
        2
        >>> merged = catalog.merged({"ID-01": full_name.with_threshold(3)})
    """

    def __init__(
        self,
        attributes: Optional[Any] = None,
    ) -> None:
        entries: dict[str, AttributeDefinition] = {}
        if isinstance(attributes, Mapping):
            for attribute_id, definition in attributes.items():
                entries[attribute_id] = self._check_entry(attribute_id, definition)
        elif attributes is not None:
            for definition in attributes:
                entries[definition.id] = self._check_entry(definition.id, definition)
        self._entries = MappingProxyType(entries)

    @staticmethod
    def _check_entry(attribute_id: str, definition: Any) -> AttributeDefinition:
        if not isinstance(definition, AttributeDefinition):
            raise TypeError(
                f"Catalog entry {attribute_id!r} must be an AttributeDefinition, "
                f"got {type(definition).__name__}"
            )
        if definition.id != attribute_id:
            raise ValueError(
                f"Catalog key {attribute_id!r} does not match attribute id {definition.id!r}"
            )
        return definition

    def __getitem__(self, attribute_id: str) -> AttributeDefinition:
        return self._entries[attribute_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AttributeCatalog({list(self._entries)!r})"

    def merged(
        self, overrides: Optional[Mapping[str, AttributeDefinition]]
    ) -> "AttributeCatalog":
        """
        Create a new catalog with overrides applied.

        Each override replaces the entry with the same id entirely; there is
        no field-by-field merge. Ids not already present are added.
        """
        if not overrides:
            return self
        return AttributeCatalog({**self._entries, **dict(overrides)})

    def by_category(self, category: AttributeCategory) -> list[AttributeDefinition]:
        """Get all definitions in a category, in catalog order."""
        return [attr for attr in self._entries.values() if attr.category == category]

    def visible_at(self, level: DisclosureLevel) -> list[str]:
        """Get the ids of attributes visible at a level."""
        return [
            attribute_id
            for attribute_id, attr in self._entries.items()
            if attr.is_visible_at(level)
        ]

    def compliance_protected(self) -> list[AttributeDefinition]:
        return [attr for attr in self._entries.values() if attr.compliance_protected]

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert catalog to dictionary keyed by attribute id."""
        return {attribute_id: attr.to_dict() for attribute_id, attr in self._entries.items()}


def _attr(
    attribute_id: str,
    name: str,
    category: AttributeCategory,
    risk: RiskTier,
    threshold: DisclosureLevel,
    **kwargs: Any,
) -> AttributeDefinition:
    return AttributeDefinition(
        id=attribute_id,
        name=name,
        category=category,
        risk=risk,
        threshold=threshold,
        **kwargs,
    )


_IDENTITY = AttributeCategory.IDENTITY
_CONTACT = AttributeCategory.CONTACT
_ORG = AttributeCategory.ORGANIZATIONAL
_ACTIVITY = AttributeCategory.ACTIVITY

_OMIT = RedactionStrategy.OMIT
_REPLACE = RedactionStrategy.REPLACE


DEFAULT_CATALOG = AttributeCatalog(
    [
        # Identity attributes
        _attr("ID-01", "Full Name", _IDENTITY, RiskTier.HIGH, 2,
              redaction=_REPLACE, redacted_value="Staff Member"),
        _attr("ID-02", "Photo/Headshot", _IDENTITY, RiskTier.HIGH, 2, redaction=_OMIT),
        _attr("ID-03", "Job Title/Role", _IDENTITY, RiskTier.MEDIUM, 1),
        _attr("ID-04", "Biography/Background", _IDENTITY, RiskTier.MEDIUM, 3, redaction=_OMIT),
        _attr("ID-05", "Professional Credentials", _IDENTITY, RiskTier.LOW, 3),
        # Contact vectors
        _attr("CV-01", "Email Address", _CONTACT, RiskTier.VERY_HIGH, 4,
              redaction=_REPLACE, redacted_value="Contact the organization"),
        _attr("CV-02", "Phone Number", _CONTACT, RiskTier.VERY_HIGH, 4, redaction=_OMIT),
        _attr("CV-03", "Office Location/Address", _CONTACT, RiskTier.VERY_HIGH, 4,
              redaction=_OMIT),
        _attr("CV-04", "Social Media Links", _CONTACT, RiskTier.MEDIUM, 3, redaction=_OMIT),
        _attr("CV-05", "Messaging Handles", _CONTACT, RiskTier.HIGH, 4, redaction=_OMIT),
        # Organizational relationships
        _attr("OR-01", "Department/Team", _ORG, RiskTier.LOW, 1),
        _attr("OR-02", "Board Membership", _ORG, RiskTier.MEDIUM, 3, compliance_protected=True),
        _attr("OR-03", "Partner Organizations", _ORG, RiskTier.MEDIUM, 3),
        _attr("OR-04", "Project Associations", _ORG, RiskTier.LOW, 2),
        _attr("OR-05", "Advisory/Volunteer Status", _ORG, RiskTier.LOW, 3),
        # Temporal/activity data
        _attr("AD-01", "Work Schedule/Availability", _ACTIVITY, RiskTier.HIGH, 4,
              redaction=_OMIT),
        _attr("AD-02", "Event Participation", _ACTIVITY, RiskTier.MEDIUM, 3, redaction=_OMIT),
        _attr("AD-03", "Publication Dates", _ACTIVITY, RiskTier.LOW, 2),
        _attr("AD-04", "Project Timelines", _ACTIVITY, RiskTier.MEDIUM, 3),
        _attr("AD-05", "Bylines/Authorship", _ACTIVITY, RiskTier.MEDIUM, 2,
              redaction=_REPLACE, redacted_value="Organization Staff"),
    ]
)
