"""Responsive privacy exception hierarchy.

Field-level transforms never raise: unknown attributes, unconfigured
collections and compliance-protected removals are reported as warnings on the
result. The exceptions below cover the boundaries around the engine, where the
build operator hands in configuration files and disclosure levels.
"""

from typing import Any, Dict, List, Optional, Union


class ResponsivePrivacyError(Exception):
    """Base exception for all responsive privacy errors.

    Attributes:
        message: Human-readable error description
        context: Where the error came from (config file, section, field)
        recovery_suggestions: Hints shown to the operator by the CLI
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def describe(self) -> str:
        """Message followed by one hint line per recovery suggestion."""
        lines = [self.message]
        lines.extend(f"  Hint: {suggestion}" for suggestion in self.recovery_suggestions)
        return "\n".join(lines)


class ValidationError(ResponsivePrivacyError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context("field_name", field_name)
        if expected_type:
            self.add_context("expected_type", expected_type)
        if actual_value is not None:
            self.add_context("actual_value", str(actual_value))


class LevelValidationError(ValidationError):
    """Raised when a disclosure level passed in code is outside 0-4.

    Levels read from the environment or the command line never raise; they
    fall back to a default instead.
    """

    def __init__(self, message: str, level: Optional[Any] = None, **kwargs):
        super().__init__(
            message, field_name="level", expected_type="int in [0, 4]", actual_value=level, **kwargs
        )
        self.add_recovery_suggestion("Use a disclosure level between 0 and 4")


class ConfigurationError(ValidationError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)


class ConfigValidationError(ConfigurationError):
    """Raised when a configuration file cannot be parsed or fails the schema."""


def create_configuration_error(
    message: str,
    config_file: Optional[Union[str, Any]] = None,
    section: Optional[str] = None,
) -> ConfigurationError:
    """Create a configuration error with standard context."""
    error = ConfigurationError(
        message=message,
        config_file=str(config_file) if config_file is not None else None,
        config_section=section,
    )

    if section == "collections":
        error.add_recovery_suggestion(
            "Map at least one content collection to attribute ids under 'collections'"
        )
    error.add_recovery_suggestion("Run 'responsive-privacy check' on the config file")
    return error
