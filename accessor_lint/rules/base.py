"""
Shared types for accessor-lint rules.

A rule receives a RuleContext for one source file (its text, language,
lazily parsed tree-sitter tree, optional diff scope and configuration)
and answers with Finding objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import RuleConfig, RuleEngineConfig


class Severity(Enum):
    """How urgently a finding should be addressed."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Evidence:
    """Source excerpt and structured data backing a finding."""

    description: str
    line_number: int | None = None
    code_snippet: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "line_number": self.line_number,
            "code_snippet": self.code_snippet,
            "data": self.data,
        }


@dataclass
class Finding:
    """One diagnostic, located in a file."""

    rule_id: str
    severity: Severity
    summary: str
    file_path: str
    line_number: int | None = None
    end_line: int | None = None
    evidence: list[Evidence] = field(default_factory=list)
    remediation_hints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form for the host's reporters."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "summary": self.summary,
            "file_path": self.file_path,
            "line_number": self.line_number,
            "end_line": self.end_line,
            "evidence": [e.to_dict() for e in self.evidence],
            "remediation_hints": self.remediation_hints,
        }


# File suffixes handled by the JavaScript-family grammars
EXTENSION_LANGUAGES = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
}


@dataclass
class RuleContext:
    """Everything a rule may look at for one file."""

    file_path: Path
    content: str
    language: str

    # Lines touched by the current change; None puts the whole file in scope
    changed_lines: set[int] | None = None

    config: "RuleEngineConfig | None" = field(default=None, repr=False)

    _ast_tree: Any = field(default=None, repr=False)
    _parser: Any = field(default=None, repr=False)

    @property
    def ast_tree(self) -> Any:
        """tree-sitter tree for the file, parsed on first access.

        None for languages without a grammar.
        """
        if self._ast_tree is None:
            if self._parser is None:
                from ..analysis.base_parsers import create_parser

                self._parser = create_parser(self.language, self.file_path)
            if self._parser is not None:
                self._ast_tree = self._parser.parse_tree(self.content)
        return self._ast_tree

    def is_line_in_diff(self, line_number: int) -> bool:
        if self.changed_lines is None:
            return True
        return line_number in self.changed_lines

    @classmethod
    def from_file(
        cls,
        file_path: Path,
        language: str | None = None,
        config: "RuleEngineConfig | None" = None,
    ) -> "RuleContext":
        """Read a file and guess its language from the suffix."""
        content = file_path.read_text(encoding="utf-8", errors="surrogateescape")

        if language is None:
            language = EXTENSION_LANGUAGES.get(file_path.suffix.lower(), "unknown")

        return cls(
            file_path=file_path,
            content=content,
            language=language,
            config=config,
        )


class BaseRule(ABC):
    """Interface every accessor-lint rule implements."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Identifier in CATEGORY.RULE_NAME form, e.g. 'BEST_PRACTICES.ACCESSOR_PAIRS'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category, e.g. best_practices."""

    @property
    @abstractmethod
    def default_severity(self) -> Severity:
        """Severity used unless the rule config overrides it."""

    @property
    def supported_languages(self) -> list[str] | None:
        """Languages the rule understands; None means all."""
        return None

    @property
    def description(self) -> str:
        return f"Rule {self.rule_id}: {self.name}"

    @property
    def is_fast(self) -> bool:
        """Whether the rule is cheap enough to run on every write."""
        return True

    @abstractmethod
    def check(self, context: RuleContext) -> list[Finding]:
        """Analyse one file.

        Args:
            context: RuleContext for the file

        Returns:
            Findings for every problem detected.
        """

    def get_severity(self, config: "RuleConfig | None") -> Severity:
        if config and config.severity_override:
            return Severity(config.severity_override)
        return self.default_severity

    def _create_finding(
        self,
        summary: str,
        file_path: str,
        line_number: int | None = None,
        end_line: int | None = None,
        evidence: list[Evidence] | None = None,
        remediation_hints: list[str] | None = None,
        config: "RuleConfig | None" = None,
    ) -> Finding:
        """Finding stamped with this rule's ID and configured severity."""
        return Finding(
            rule_id=self.rule_id,
            severity=self.get_severity(config),
            summary=summary,
            file_path=file_path,
            line_number=line_number,
            end_line=end_line,
            evidence=evidence or [],
            remediation_hints=remediation_hints or [],
        )
