"""Structured error types raised while preparing rules.

Analysis itself never raises: findings are returned. These errors
cover invalid rule configuration, detected once before any file is
checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RuleConfigurationError(Exception):
    """Invalid configuration for a rule, with a recovery suggestion.

    Attributes:
        rule_id: Rule whose configuration is invalid.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
    """

    rule_id: str
    message: str
    suggestion: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self) -> str:
        """Format the error for display.

        Returns:
            Formatted error string with suggestion if available.
        """
        lines = [f"Error in {self.rule_id}: {self.message}"]

        if self.suggestion:
            lines.append(f"Suggestion: {self.suggestion}")

        for key, value in self.details.items():
            lines.append(f"  {key}: {value}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format()


def invalid_option_error(rule_id: str, option: str, value: Any) -> RuleConfigurationError:
    """Create an error for a rule option that is not a boolean."""
    return RuleConfigurationError(
        rule_id=rule_id,
        message=f"Option '{option}' must be a boolean, got {type(value).__name__}",
        suggestion=f'Set "{option}" to true or false in the rule parameters',
        details={"option": option, "value": repr(value)},
    )
