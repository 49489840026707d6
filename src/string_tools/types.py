"""Core types."""

from __future__ import annotations
import enum
from dataclasses import dataclass, field, asdict
from typing import Any, Generic, TypeVar

from .errors import RangeError

T = TypeVar("T")


class EntityKind(str, enum.Enum):
    """Entity classes a PatternRecognizer can be asked to scan for."""
    LINK = "link"
    DATE = "date"


@dataclass(frozen=True, slots=True)
class SemanticRange:
    """Half-open [start, end) interval in code points."""
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise RangeError(f"negative bound in [{self.start}, {self.end})")
        if self.start > self.end:
            raise RangeError(f"start {self.start} is after end {self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: SemanticRange) -> bool:
        return self.start < other.end and self.end > other.start


@dataclass(frozen=True, slots=True)
class RawMatch:
    """A recognizer hit, in whatever unit the recognizer reports."""
    start: int
    end: int
    payload: Any = None    # None = recognized span without a resolvable value


@dataclass(frozen=True, slots=True)
class Match(Generic[T]):
    """A located entity.  ``text`` is an owned copy, not a view."""
    range: SemanticRange
    text: str
    payload: T | None = None


@dataclass(frozen=True, slots=True)
class PrefixMatch:
    """A hashtag/mention hit.

    ``range`` always covers the prefix character, even when ``text`` has
    had it stripped.
    """
    range: SemanticRange
    text: str
    includes_prefix: bool = True


@dataclass(slots=True)
class TextAnalysis:
    """Result of analyzing a piece of text."""
    text: str
    length: int
    utf16_length: int
    links: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)      # ISO 8601
    hashtags: list[str] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)
    is_email_like: bool = False
    is_tweetable: bool = False
    is_blank: bool = False
    language: str | None = None
    is_right_to_left: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
