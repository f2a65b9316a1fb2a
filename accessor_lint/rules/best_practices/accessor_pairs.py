"""
Accessor pairs rule.

Detects property accessors that are missing their counterpart: a setter
defined without a getter for the same property, and optionally a getter
defined without a setter. Object literals, class bodies and descriptor
objects passed to Object.defineProperty / Reflect.defineProperty /
Object.defineProperties / Object.create are checked, each as its own
key space.

Computed keys pair only when their key expressions are textually
identical.
"""

import logging
from dataclasses import dataclass
from typing import Any

from tree_sitter import Node

from ...analysis.javascript_members import (
    CONTAINER_NODE_TYPES,
    classify_node,
    iter_containers,
)
from ...analysis.members import (
    AccessorMember,
    Container,
    DescriptorEntry,
    Direction,
    PropertyKey,
    SourceLocation,
)
from ..base import BaseRule, Evidence, Finding, RuleContext, Severity
from ..config import RuleConfig
from ..errors import invalid_option_error

logger = logging.getLogger(__name__)

RULE_ID = "BEST_PRACTICES.ACCESSOR_PAIRS"

MESSAGES = {
    Direction.GET: "Getter is not present",
    Direction.SET: "Setter is not present",
}


@dataclass(frozen=True)
class AccessorPairPolicy:
    """Which missing-counterpart directions are reported."""

    require_get_for_set: bool = True
    require_set_for_get: bool = False

    # Rule parameter names
    SET_WITH_NO_GET = "setWithNoGet"
    GET_WITH_NO_SET = "getWithNoSet"

    @classmethod
    def from_parameters(cls, parameters: dict[str, Any]) -> "AccessorPairPolicy":
        """Build a policy from rule parameters.

        Raises:
            RuleConfigurationError: If an option is present but not a boolean
        """
        values = {}
        for option, default in (
            (cls.SET_WITH_NO_GET, True),
            (cls.GET_WITH_NO_SET, False),
        ):
            value = parameters.get(option, default)
            if not isinstance(value, bool):
                raise invalid_option_error(RULE_ID, option, value)
            values[option] = value

        return cls(
            require_get_for_set=values[cls.SET_WITH_NO_GET],
            require_set_for_get=values[cls.GET_WITH_NO_SET],
        )


DEFAULT_POLICY = AccessorPairPolicy()


@dataclass
class PairRecord:
    """Directions present for one property key within a container."""

    key: PropertyKey
    has_get: bool = False
    has_set: bool = False
    get_location: SourceLocation | None = None
    set_location: SourceLocation | None = None

    def add(self, member: AccessorMember) -> None:
        if isinstance(member, DescriptorEntry):
            if member.has_get:
                self._mark(Direction.GET, member.location)
            if member.has_set:
                self._mark(Direction.SET, member.location)
        else:
            self._mark(member.direction, member.location)

    def _mark(self, direction: Direction, location: SourceLocation) -> None:
        # The first member of each direction is the one reported
        if direction == Direction.GET:
            if not self.has_get:
                self.get_location = location
            self.has_get = True
        else:
            if not self.has_set:
                self.set_location = location
            self.has_set = True


@dataclass(frozen=True)
class MissingAccessor:
    """A property whose accessor counterpart is missing."""

    missing: Direction
    key: PropertyKey
    location: SourceLocation

    @property
    def message(self) -> str:
        return MESSAGES[self.missing]


def pair_members(members: list[AccessorMember]) -> list[PairRecord]:
    """Group a container's members by key, in first-appearance order."""
    records: dict[PropertyKey, PairRecord] = {}
    for member in members:
        record = records.get(member.key)
        if record is None:
            record = records[member.key] = PairRecord(key=member.key)
        record.add(member)
    return list(records.values())


def check_container(
    container: Container, policy: AccessorPairPolicy
) -> list[MissingAccessor]:
    """Report every key of one container that violates the policy."""
    diagnostics = []
    for record in pair_members(container.members):
        if record.has_set and not record.has_get and policy.require_get_for_set:
            diagnostics.append(
                MissingAccessor(Direction.GET, record.key, record.set_location)
            )
        elif record.has_get and not record.has_set and policy.require_set_for_get:
            diagnostics.append(
                MissingAccessor(Direction.SET, record.key, record.get_location)
            )
    return diagnostics


class AccessorPairsRule(BaseRule):
    """Detect setters without getters (and optionally getters without setters)."""

    CONTAINER_NODE_TYPES = CONTAINER_NODE_TYPES

    @property
    def rule_id(self) -> str:
        return RULE_ID

    @property
    def name(self) -> str:
        return "Accessor Pairs"

    @property
    def category(self) -> str:
        return "best_practices"

    @property
    def default_severity(self) -> Severity:
        return Severity.MEDIUM

    @property
    def supported_languages(self) -> list[str] | None:
        return ["javascript", "typescript"]

    @property
    def description(self) -> str:
        return (
            "Detects properties that define a setter without a getter, and "
            "optionally a getter without a setter, in object literals, class "
            "bodies and property descriptors."
        )

    @property
    def is_fast(self) -> bool:
        return True

    def __init__(self) -> None:
        # Policy built for the rule config of the current run
        self._policy_source: RuleConfig | None = None
        self._policy: AccessorPairPolicy | None = None

    def get_policy(self, config: RuleConfig | None) -> AccessorPairPolicy:
        """Policy for this run, from rule parameters or defaults.

        The policy is built once per RuleConfig instance and reused for
        every file checked with it.
        """
        if config is None or not config.parameters:
            return DEFAULT_POLICY
        if self._policy is None or self._policy_source is not config:
            self._policy = AccessorPairPolicy.from_parameters(config.parameters)
            self._policy_source = config
        return self._policy

    def check(self, context: RuleContext) -> list[Finding]:
        """Check every accessor container in the file.

        Args:
            context: RuleContext with file content

        Returns:
            List of findings for accessors missing their counterpart
        """
        if context.config and not context.config.is_rule_enabled(self.rule_id):
            return []

        tree = context.ast_tree
        if tree is None:
            return []

        if tree.root_node.has_error:
            logger.debug(f"Syntax errors in {context.file_path}, checking anyway")

        rule_config = context.config.get_rule_config(self.rule_id) if context.config else None
        policy = self.get_policy(rule_config)

        findings = []
        containers = 0
        for container in iter_containers(tree.root_node):
            containers += 1
            for diagnostic in check_container(container, policy):
                if not context.is_line_in_diff(diagnostic.location.line):
                    continue
                findings.append(
                    self._to_finding(diagnostic, str(context.file_path), rule_config)
                )

        logger.debug(
            f"{self.rule_id}: {containers} accessor containers, "
            f"{len(findings)} findings in {context.file_path}"
        )
        return findings

    def check_node(
        self,
        node: Node,
        file_path: str,
        policy: AccessorPairPolicy | None = None,
        config: RuleConfig | None = None,
    ) -> list[Finding]:
        """Check a single container node for hosts that walk the tree themselves.

        Nodes whose type is not in CONTAINER_NODE_TYPES, or that hold no
        accessors, yield no findings. A disabled rule config yields none
        either.
        """
        if config is not None and not config.enabled:
            return []
        if policy is None:
            policy = self.get_policy(config)

        findings = []
        for container in classify_node(node):
            for diagnostic in check_container(container, policy):
                findings.append(self._to_finding(diagnostic, file_path, config))
        return findings

    def _to_finding(
        self,
        diagnostic: MissingAccessor,
        file_path: str,
        config: RuleConfig | None,
    ) -> Finding:
        location = diagnostic.location
        present = "setter" if diagnostic.missing == Direction.GET else "getter"
        missing = diagnostic.missing.value + "ter"

        logger.debug(
            f"{diagnostic.message} for '{diagnostic.key.display}' "
            f"at {file_path}:{location.line}"
        )

        return self._create_finding(
            summary=diagnostic.message,
            file_path=file_path,
            line_number=location.line,
            end_line=location.end_line,
            evidence=[
                Evidence(
                    description=(
                        f"Property '{diagnostic.key.display}' has a {present} "
                        f"but no {missing}"
                    ),
                    line_number=location.line,
                    code_snippet=location.snippet,
                    data={
                        "property": diagnostic.key.text,
                        "key_kind": diagnostic.key.kind.value,
                        "is_static": diagnostic.key.is_static,
                        "missing": diagnostic.missing.value,
                        "column": location.column,
                    },
                )
            ],
            remediation_hints=[
                f"Add a {missing} for '{diagnostic.key.display}' next to the {present}",
                f"Or remove the {present} if the property is not meant to be accessed this way",
            ],
            config=config,
        )
