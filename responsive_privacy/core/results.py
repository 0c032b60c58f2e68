"""Result data structures for entry transforms and build audits."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .levels import DisclosureLevel
from .strategies import RedactionStrategy

# Attribute id recorded for fields no attribute governs
UNMANAGED = ""


@dataclass(frozen=True)
class FieldResult:
    """What happened to one field of a record.

    Attributes:
        field: The field name
        attribute_id: Attribute the field maps to, "" when unmanaged
        visible: Whether the field is visible at the current level
        value: The original value, the substitute, or None when omitted
        redaction_applied: Strategy applied when the field was hidden
    """

    field: str
    attribute_id: str
    visible: bool
    value: Any = None
    redaction_applied: Optional[RedactionStrategy] = None

    @property
    def is_managed(self) -> bool:
        return self.attribute_id != UNMANAGED

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "attribute_id": self.attribute_id,
            "visible": self.visible,
            "value": self.value,
            "redaction_applied": (
                self.redaction_applied.value if self.redaction_applied else None
            ),
        }


@dataclass(frozen=True)
class EntryResult:
    """
    Result of transforming one content record.

    Attributes:
        data: The filtered record, in input field order. Omitted fields are
            absent; replaced fields carry their substitute.
        fields: One FieldResult per input field, in input order
        hidden_fields: Names of fields hidden at this level (omitted or replaced)
        warnings: Compliance warnings for protected attributes that were hidden
        configuration_warnings: Fields mapped to ids missing from the catalog

    Examples:
        >>> result = transform_entry("team", member, context)
        >>> "bio" in result.data
        False
        >>> result.hidden_fields
        ('bio', 'email')
    """

    data: dict[str, Any]
    fields: tuple[FieldResult, ...] = field(default_factory=tuple)
    hidden_fields: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    configuration_warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def omitted_fields(self) -> tuple[str, ...]:
        """Hidden fields removed from the record entirely."""
        return tuple(
            result.field
            for result in self.fields
            if result.redaction_applied == RedactionStrategy.OMIT
        )

    @property
    def replaced_fields(self) -> tuple[str, ...]:
        """Hidden fields kept in the record with a substitute value."""
        return tuple(
            result.field
            for result in self.fields
            if result.redaction_applied == RedactionStrategy.REPLACE
        )

    def field_result(self, field_name: str) -> Optional[FieldResult]:
        for result in self.fields:
            if result.field == field_name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": dict(self.data),
            "fields": [result.to_dict() for result in self.fields],
            "hidden_fields": list(self.hidden_fields),
            "warnings": list(self.warnings),
            "configuration_warnings": list(self.configuration_warnings),
        }


@dataclass(frozen=True)
class CollectionAudit:
    """Aggregated audit figures for one collection."""

    collection: str
    entry_count: int
    hidden_count: int
    hidden_field_names: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    configuration_warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_hidden_fields(self) -> bool:
        return self.hidden_count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "entry_count": self.entry_count,
            "hidden_count": self.hidden_count,
            "hidden_field_names": list(self.hidden_field_names),
            "warnings": list(self.warnings),
            "configuration_warnings": list(self.configuration_warnings),
        }


@dataclass(frozen=True)
class AuditSummary:
    """
    Build-level audit of everything hidden and every warning raised.

    Attributes:
        level: The disclosure level of the build
        level_name: Label from the level definitions, "Unknown" if undefined
        level_description: Description from the level definitions, or ""
        collections: Per-collection audits, in the order results were given
    """

    level: DisclosureLevel
    level_name: str
    level_description: str
    collections: tuple[CollectionAudit, ...] = field(default_factory=tuple)

    @property
    def total_hidden(self) -> int:
        return sum(audit.hidden_count for audit in self.collections)

    @property
    def total_warnings(self) -> int:
        return sum(len(audit.warnings) for audit in self.collections)

    @property
    def total_configuration_warnings(self) -> int:
        return sum(len(audit.configuration_warnings) for audit in self.collections)

    @property
    def hidden_field_names(self) -> tuple[str, ...]:
        """Distinct hidden field names across the whole build."""
        names: dict[str, None] = {}
        for audit in self.collections:
            for name in audit.hidden_field_names:
                names.setdefault(name, None)
        return tuple(names)

    def collection(self, name: str) -> Optional[CollectionAudit]:
        for audit in self.collections:
            if audit.collection == name:
                return audit
        return None

    def render(self) -> str:
        """Render the plain-text build summary."""
        from .reporting import render_summary

        return render_summary(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "level_name": self.level_name,
            "level_description": self.level_description,
            "collections": [audit.to_dict() for audit in self.collections],
            "summary": {
                "total_hidden": self.total_hidden,
                "total_warnings": self.total_warnings,
                "total_configuration_warnings": self.total_configuration_warnings,
                "hidden_field_names": list(self.hidden_field_names),
            },
        }
