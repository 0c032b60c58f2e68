"""Redaction strategies for attributes hidden below their threshold."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .attributes import AttributeDefinition


class RedactionStrategy(Enum):
    """How to handle a field whose attribute is hidden at the current level.

    - OMIT: remove the field entirely from the filtered record
    - REPLACE: substitute a generic redacted value
    """

    OMIT = "omit"
    REPLACE = "replace"


DEFAULT_STRATEGY = RedactionStrategy.OMIT


def default_redacted_value(attribute_name: str) -> str:
    """Generic replacement text for an attribute with no configured value."""
    return f"[{attribute_name} hidden]"


@dataclass(frozen=True)
class Substitute:
    """
    What appears in place of a hidden field.

    Attributes:
        strategy: The redaction strategy that produced this substitute
        value: Replacement text for REPLACE, always None for OMIT

    Examples:
        >>> OMIT.is_omit
        True
        >>> Substitute.replace("Staff Member").value
        'Staff Member'
    """

    strategy: RedactionStrategy
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if self.strategy == RedactionStrategy.OMIT and self.value is not None:
            raise ValueError("Omit substitutes cannot carry a value")
        if self.strategy == RedactionStrategy.REPLACE and not isinstance(self.value, str):
            raise ValueError("Replace substitutes require a string value")

    @classmethod
    def replace(cls, value: str) -> "Substitute":
        return cls(RedactionStrategy.REPLACE, value)

    @property
    def is_omit(self) -> bool:
        return self.strategy == RedactionStrategy.OMIT

    def to_dict(self) -> dict[str, Any]:
        return {"strategy": self.strategy.value, "value": self.value}


OMIT = Substitute(RedactionStrategy.OMIT)


def resolve_redaction(attribute: "AttributeDefinition") -> Substitute:
    """
    Get the substitute for a hidden attribute.

    The result depends only on the attribute definition, so a hidden field
    always gets the same treatment regardless of how far below its threshold
    the current level is.

    Args:
        attribute: The attribute definition being hidden

    Returns:
        OMIT, or a REPLACE substitute carrying the configured replacement text
        (or "[<attribute name> hidden]" when none is configured)
    """
    strategy = attribute.redaction or DEFAULT_STRATEGY

    if strategy == RedactionStrategy.REPLACE:
        value = attribute.redacted_value
        if value is None:
            value = default_redacted_value(attribute.name)
        return Substitute.replace(value)

    return OMIT
