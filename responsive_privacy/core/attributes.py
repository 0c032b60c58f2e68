"""Attribute definitions: sensitivity rules independent of any record field."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .levels import MAX_LEVEL, MIN_LEVEL, DisclosureLevel, is_valid_level
from .strategies import DEFAULT_STRATEGY, RedactionStrategy, default_redacted_value


class AttributeCategory(Enum):
    """The four attribute categories of the attribution framework."""

    IDENTITY = "identity"
    CONTACT = "contact"
    ORGANIZATIONAL = "organizational"
    ACTIVITY = "activity"


class RiskTier(Enum):
    """Risk tiers from the risk and response matrix."""

    VERY_HIGH = "very-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class AttributeDefinition:
    """
    A sensitivity rule for one kind of information about a person.

    Attributes:
        id: Taxonomy identifier, e.g. "ID-01" or "CV-02"
        name: Human-readable name, e.g. "Full Name"
        category: Which attribute category this belongs to
        risk: Risk tier from the taxonomy
        threshold: Minimum disclosure level at which the attribute is visible
        redaction: How the attribute is handled when hidden (default OMIT)
        redacted_value: Replacement text for REPLACE; synthesized as
            "[<name> hidden]" when REPLACE is chosen without one
        compliance_protected: Hiding this attribute emits a compliance warning

    Examples:
        >>> full_name = AttributeDefinition(
        ...     id="ID-01",
        ...     name="Full Name",
        ...     category=AttributeCategory.IDENTITY,
        ...     risk=RiskTier.HIGH,
        ...     threshold=2,
        ...     redaction=RedactionStrategy.REPLACE,
        ...     redacted_value="Staff Member",
        ... )

        >>> # Strings are accepted for enum fields
        >>> board = AttributeDefinition(
        ...     id="OR-02",
        ...     name="Board Membership",
        ...     category="organizational",
        ...     risk="medium",
        ...     threshold=3,
        ...     compliance_protected=True,
        ... )
    """

    id: str
    name: str
    category: AttributeCategory
    risk: RiskTier
    threshold: DisclosureLevel
    redaction: RedactionStrategy = field(default=DEFAULT_STRATEGY)
    redacted_value: Optional[str] = field(default=None)
    compliance_protected: bool = field(default=False)

    def __post_init__(self) -> None:
        """Coerce enum fields and validate the rule after initialization."""
        self._validate_identity()
        self._coerce_enum("category", AttributeCategory)
        self._coerce_enum("risk", RiskTier)
        if self.redaction is None:
            object.__setattr__(self, "redaction", DEFAULT_STRATEGY)
        self._coerce_enum("redaction", RedactionStrategy)
        self._validate_threshold()
        self._validate_redacted_value()

        if not isinstance(self.compliance_protected, bool):
            raise ValueError(
                f"compliance_protected for {self.id} must be a boolean"
            )

    def _validate_identity(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Attribute id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Attribute {self.id} must have a non-empty name")

    def _coerce_enum(self, attr: str, enum_cls: type[Enum]) -> None:
        value = getattr(self, attr)
        if isinstance(value, enum_cls):
            return
        try:
            object.__setattr__(self, attr, enum_cls(value))
        except ValueError as e:
            valid = [member.value for member in enum_cls]
            raise ValueError(
                f"Invalid {attr} '{value}' for {self.id}. Valid values: {valid}"
            ) from e

    def _validate_threshold(self) -> None:
        if not is_valid_level(self.threshold):
            raise ValueError(
                f"Threshold for {self.id} must be an integer between "
                f"{MIN_LEVEL} and {MAX_LEVEL}, got {self.threshold!r}"
            )

    def _validate_redacted_value(self) -> None:
        if self.redacted_value is not None and not isinstance(self.redacted_value, str):
            raise ValueError(f"redacted_value for {self.id} must be a string")

        if self.redaction == RedactionStrategy.REPLACE and self.redacted_value is None:
            object.__setattr__(self, "redacted_value", default_redacted_value(self.name))

    def is_visible_at(self, level: DisclosureLevel) -> bool:
        """Check if this attribute is visible at the given level."""
        return level >= self.threshold

    def with_threshold(self, threshold: DisclosureLevel) -> "AttributeDefinition":
        """Create a new definition with a different threshold."""
        return AttributeDefinition(
            id=self.id,
            name=self.name,
            category=self.category,
            risk=self.risk,
            threshold=threshold,
            redaction=self.redaction,
            redacted_value=self.redacted_value,
            compliance_protected=self.compliance_protected,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert definition to dictionary for serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "category": self.category.value,
            "risk": self.risk.value,
            "threshold": self.threshold,
            "redaction": self.redaction.value,
        }
        if self.redacted_value is not None:
            data["redacted_value"] = self.redacted_value
        if self.compliance_protected:
            data["compliance_protected"] = True
        return data

    @classmethod
    def from_dict(cls, attribute_id: str, data: dict[str, Any]) -> "AttributeDefinition":
        """Create a definition from its dictionary form, keyed externally by id."""
        return cls(
            id=attribute_id,
            name=data["name"],
            category=data["category"],
            risk=data["risk"],
            threshold=data["threshold"],
            redaction=data.get("redaction") or DEFAULT_STRATEGY,
            redacted_value=data.get("redacted_value"),
            compliance_protected=data.get("compliance_protected", False),
        )
