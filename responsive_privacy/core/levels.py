"""Disclosure levels and their descriptive definitions.

Levels form a closed, totally ordered range where a higher number reveals
more information:

- Level 0: Complete Anonymity - active threat, immediate danger
- Level 1: Role-Only Visibility - elevated threat environment
- Level 2: Professional Identity - moderate threat, maintaining credibility
- Level 3: Public Professional - standard operations with security awareness
- Level 4: Full Transparency - no perceived threat, maximum accessibility
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import LevelValidationError

logger = logging.getLogger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 4

# Invalid external input falls back to full disclosure
DEFAULT_FALLBACK_LEVEL = MAX_LEVEL

# Optional sign and ASCII digits only
_LEVEL_PATTERN = re.compile(r"[+-]?[0-9]+")

DisclosureLevel = int


def is_valid_level(value: Any) -> bool:
    """Check whether a value is an integer disclosure level in range."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_LEVEL <= value <= MAX_LEVEL


def validate_level(value: Any) -> DisclosureLevel:
    """Return the level unchanged, raising if it is not in range.

    Raises:
        LevelValidationError: If the value is not an integer in [0, 4]
    """
    if not is_valid_level(value):
        raise LevelValidationError(
            f"Disclosure level must be an integer between {MIN_LEVEL} and {MAX_LEVEL}, "
            f"got {value!r}",
            level=value,
        )
    return int(value)


def parse_privacy_level(
    raw: Optional[str], fallback: DisclosureLevel = DEFAULT_FALLBACK_LEVEL
) -> DisclosureLevel:
    """Parse an externally supplied level string.

    Empty or missing input returns the fallback silently. Non-numeric or
    out-of-range input logs a warning and returns the fallback.

    Args:
        raw: The raw string, e.g. the value of an environment variable
        fallback: Level to use when the input is missing or invalid

    Returns:
        A valid disclosure level
    """
    fallback = validate_level(fallback)

    if raw is None or raw.strip() == "":
        return fallback

    stripped = raw.strip()
    parsed = int(stripped) if _LEVEL_PATTERN.fullmatch(stripped) else None

    if parsed is None or not is_valid_level(parsed):
        logger.warning(
            f"Invalid privacy level {raw!r}. Must be {MIN_LEVEL}-{MAX_LEVEL}. "
            f"Falling back to {fallback}."
        )
        return fallback

    return parsed


@dataclass(frozen=True)
class LevelDefinition:
    """Human-readable label for one disclosure level.

    Attributes:
        level: The disclosure level this definition describes
        name: Short label, e.g. "Professional Identity"
        description: One-line explanation of the threat posture
    """

    level: DisclosureLevel
    name: str
    description: str = ""

    def __post_init__(self) -> None:
        validate_level(self.level)
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Level name must be a non-empty string")
        if not isinstance(self.description, str):
            raise ValueError("Level description must be a string")

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "name": self.name, "description": self.description}


DEFAULT_LEVEL_DEFINITIONS: tuple[LevelDefinition, ...] = (
    LevelDefinition(
        level=0,
        name="Complete Anonymity",
        description="Active threat, immediate danger. No attributes visible.",
    ),
    LevelDefinition(
        level=1,
        name="Role-Only Visibility",
        description="Elevated threat environment. Only generic role and department visible.",
    ),
    LevelDefinition(
        level=2,
        name="Professional Identity",
        description=(
            "Moderate threat, maintaining credibility. "
            "Name, role, and project attribution visible."
        ),
    ),
    LevelDefinition(
        level=3,
        name="Public Professional",
        description=(
            "Standard operations with security awareness. "
            "Full professional profile without direct contact."
        ),
    ),
    LevelDefinition(
        level=4,
        name="Full Transparency",
        description="No perceived threat, maximum accessibility. All attributes visible.",
    ),
)


def find_level_definition(
    levels: tuple[LevelDefinition, ...], level: DisclosureLevel
) -> Optional[LevelDefinition]:
    """Find the definition for a level, or None when it is not covered."""
    for definition in levels:
        if definition.level == level:
            return definition
    return None
