"""Per-build disclosure context."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .config import PrivacyConfig, ResolvedConfig, resolve_config
from .levels import (
    DEFAULT_FALLBACK_LEVEL,
    MAX_LEVEL,
    DisclosureLevel,
    parse_privacy_level,
    validate_level,
)

logger = logging.getLogger(__name__)

PRIVACY_LEVEL_ENV_VAR = "PRIVACY_LEVEL"


@dataclass(frozen=True)
class DisclosureContext:
    """
    The target level and resolved config for one build.

    Created once and passed by reference into every transform.

    Attributes:
        current_level: The disclosure level this build renders at
        config: Resolved configuration (defaults merged with overrides)
    """

    current_level: DisclosureLevel
    config: ResolvedConfig

    def __post_init__(self) -> None:
        validate_level(self.current_level)

    @property
    def level_name(self) -> str:
        definition = self.config.level_definition(self.current_level)
        return definition.name if definition else "Unknown"

    @property
    def level_description(self) -> str:
        definition = self.config.level_definition(self.current_level)
        return definition.description if definition else ""

    @property
    def is_reduced(self) -> bool:
        """Whether this build discloses less than full transparency."""
        return self.current_level < MAX_LEVEL


def read_privacy_level(
    fallback: DisclosureLevel = DEFAULT_FALLBACK_LEVEL,
    env_var: str = PRIVACY_LEVEL_ENV_VAR,
    environ: Optional[Mapping[str, str]] = None,
) -> DisclosureLevel:
    """
    Read the target disclosure level from the environment.

    Invalid values log a warning and fall back; an unset or empty variable
    returns the fallback (full transparency by default).

    Args:
        fallback: Level used when the variable is unset or invalid
        env_var: Name of the environment variable to read
        environ: Mapping to read from instead of os.environ

    Returns:
        A valid disclosure level
    """
    source = os.environ if environ is None else environ
    return parse_privacy_level(source.get(env_var), fallback=fallback)


def create_context(
    config: PrivacyConfig, level: Optional[DisclosureLevel] = None
) -> DisclosureContext:
    """
    Create the disclosure context for the current build.

    Args:
        config: Operator configuration
        level: Target level; read from PRIVACY_LEVEL when None

    Raises:
        LevelValidationError: If an explicit level is outside 0-4
    """
    if level is None:
        level = read_privacy_level()
    else:
        level = validate_level(level)

    context = DisclosureContext(current_level=level, config=resolve_config(config))
    logger.debug(
        f"Disclosure context created: level={context.current_level} "
        f"({context.level_name}), collections={list(context.config.collections)}"
    )
    return context
