"""Rules and the shared rule types."""

from .base import BaseRule, Evidence, Finding, RuleContext, Severity
from .best_practices.accessor_pairs import AccessorPairPolicy, AccessorPairsRule
from .config import RuleConfig, RuleEngineConfig
from .errors import RuleConfigurationError

__all__ = [
    "AccessorPairPolicy",
    "AccessorPairsRule",
    "BaseRule",
    "Evidence",
    "Finding",
    "RuleConfig",
    "RuleConfigurationError",
    "RuleContext",
    "RuleEngineConfig",
    "Severity",
]
