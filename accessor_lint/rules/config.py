"""
Rule configuration for one analysis run.

The host hands over its parsed JSON settings (camelCase keys); they are
turned into typed per-rule settings here:

    {"enabled": true,
     "rules": {"BEST_PRACTICES.ACCESSOR_PAIRS": {
         "enabled": true,
         "severity": "high",
         "parameters": {"getWithNoSet": true}}}}
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RuleConfig:
    """Settings of a single rule."""

    enabled: bool = True
    severity_override: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfig":
        return cls(
            enabled=data.get("enabled", True),
            severity_override=data.get("severity"),
            parameters=data.get("parameters", {}),
        )


@dataclass
class RuleEngineConfig:
    """Settings shared by all rules of one run."""

    enabled: bool = True
    rules: dict[str, RuleConfig] = field(default_factory=dict)

    def is_rule_enabled(self, rule_id: str) -> bool:
        if not self.enabled:
            return False
        return self.get_rule_config(rule_id).enabled

    def get_rule_config(self, rule_id: str) -> RuleConfig:
        """Settings for a rule; defaults when the rule is not configured."""
        return self.rules.get(rule_id, RuleConfig())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleEngineConfig":
        return cls(
            enabled=data.get("enabled", True),
            rules={
                rule_id: RuleConfig.from_dict(rule_data)
                for rule_id, rule_data in data.get("rules", {}).items()
            },
        )
