"""
Accessor member model produced by container classification.

Classification turns raw syntax nodes into these values; pairing and
reporting work only on them.
"""

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Which side of a property an accessor intercepts."""

    GET = "get"  # read-accessor
    SET = "set"  # write-accessor


class KeyKind(Enum):
    """How a property key was written."""

    STATIC = "static"  # identifier, string or number literal
    COMPUTED = "computed"  # [expression]


class ContainerKind(Enum):
    """Syntactic grouping whose members are paired together."""

    OBJECT = "object"
    CLASS_BODY = "class_body"
    DESCRIPTOR = "descriptor"


@dataclass(frozen=True)
class PropertyKey:
    """Identity of the property an accessor targets.

    Static keys compare by literal value, computed keys by the exact
    source text of the key expression.
    """

    kind: KeyKind
    text: str
    is_static: bool = False  # class `static` members

    @property
    def display(self) -> str:
        """Key as it would appear in source."""
        name = f"[{self.text}]" if self.kind == KeyKind.COMPUTED else self.text
        return f"static {name}" if self.is_static else name


@dataclass(frozen=True)
class SourceLocation:
    """Span of the node a diagnostic points at (1-indexed lines, 0-indexed columns)."""

    line: int
    column: int
    end_line: int
    end_column: int
    snippet: str = ""


@dataclass(frozen=True)
class LiteralAccessor:
    """A getter or setter declared in an object literal or class body."""

    direction: Direction
    key: PropertyKey
    location: SourceLocation


@dataclass(frozen=True)
class DescriptorEntry:
    """One property defined through a descriptor object."""

    key: PropertyKey
    has_get: bool
    has_set: bool
    location: SourceLocation


AccessorMember = LiteralAccessor | DescriptorEntry


@dataclass
class Container:
    """Accessor members that share one key space."""

    kind: ContainerKind
    location: SourceLocation
    members: list[AccessorMember] = field(default_factory=list)
