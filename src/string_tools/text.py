"""IndexableText: code-point indexing over an immutable string.

The "character" unit everywhere in string_tools is the Unicode code point,
which is also what a Python ``str`` indexes by.  Anything reporting offsets
in another unit (UTF-16 code units, UTF-8 bytes) is converted here, once,
before it reaches a SemanticRange.

Usage:
    text = IndexableText("café \U0001F600 ok")
    len(text)                                  # 9
    text.utf16_length                          # 10 (the emoji is a surrogate pair)
    text.from_raw_range(5, 7, "utf16")         # SemanticRange(start=5, end=6)
"""

from __future__ import annotations
import bisect
import re
from functools import cached_property
from typing import Callable, Literal

from .errors import CharacterIndexError, RangeError
from .types import SemanticRange

Unit = Literal["codepoint", "utf16", "utf8"]

UNITS: tuple[str, ...] = ("codepoint", "utf16", "utf8")

# Leading float, the way C's strtof reads it: optional whitespace, sign,
# digits with optional fraction, optional exponent.
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _utf16_width(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def _utf8_width(ch: str) -> int:
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


class IndexableText:
    """Read-only, code-point indexed view of a string."""

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        self._value = value

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @property
    def length(self) -> int:
        return len(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"IndexableText({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexableText):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def full_range(self) -> SemanticRange:
        return SemanticRange(0, len(self._value))

    def substring(self, rng: SemanticRange) -> str:
        """Return the characters covered by ``rng``.

        SemanticRange already rejects negative or inverted bounds; this
        rejects ranges that run past the end of the text.
        """
        if rng.end > len(self._value):
            raise RangeError(
                f"range [{rng.start}, {rng.end}) exceeds text length {len(self._value)}"
            )
        return self._value[rng.start:rng.end]

    def char_at(self, index: int) -> str:
        if index < 0 or index >= len(self._value):
            raise CharacterIndexError(
                f"index {index} out of bounds for length {len(self._value)}"
            )
        return self._value[index]

    def __getitem__(self, key: int | slice) -> str:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise RangeError("stepped slices are not supported")
            start = 0 if key.start is None else key.start
            end = len(self._value) if key.stop is None else key.stop
            return self.substring(SemanticRange(start, end))
        return self.char_at(key)

    def range_of(self, substring: str) -> SemanticRange | None:
        """Range of the first literal occurrence of ``substring``, or None."""
        idx = self._value.find(substring)
        if idx == -1:
            return None
        return SemanticRange(idx, idx + len(substring))

    @property
    def float_value(self) -> float:
        """Leading numeric prefix as a float, 0.0 when there is none."""
        m = _LEADING_FLOAT.match(self._value)
        return float(m.group(1)) if m else 0.0

    # ------------------------------------------------------------------
    # Raw-unit interop
    # ------------------------------------------------------------------

    @property
    def utf16_length(self) -> int:
        return self._offsets("utf16")[-1]

    @property
    def utf8_length(self) -> int:
        return self._offsets("utf8")[-1]

    def from_raw_range(self, start: int, end: int, unit: Unit) -> SemanticRange:
        """Convert a [start, end) range in ``unit`` to a SemanticRange.

        Raises RangeError when either bound lies past the end of the text
        or splits a code point (e.g. between the halves of a surrogate pair).
        """
        if start < 0 or end < 0 or start > end:
            raise RangeError(f"invalid {unit} range [{start}, {end})")
        if unit == "codepoint":
            rng = SemanticRange(start, end)
            self.substring(rng)     # bounds check
            return rng
        return SemanticRange(self._to_codepoint(start, unit), self._to_codepoint(end, unit))

    def to_raw_range(self, rng: SemanticRange, unit: Unit) -> tuple[int, int]:
        """Convert a SemanticRange to [start, end) offsets in ``unit``."""
        self.substring(rng)
        if unit == "codepoint":
            return rng.start, rng.end
        offsets = self._offsets(unit)
        return offsets[rng.start], offsets[rng.end]

    def _to_codepoint(self, offset: int, unit: str) -> int:
        offsets = self._offsets(unit)
        idx = bisect.bisect_left(offsets, offset)
        if idx >= len(offsets):
            raise RangeError(f"{unit} offset {offset} exceeds text length {offsets[-1]}")
        if offsets[idx] != offset:
            raise RangeError(f"{unit} offset {offset} splits a code point")
        return idx

    def _offsets(self, unit: str) -> list[int]:
        # offsets[i] = raw units preceding code point i; offsets[-1] = total
        if unit == "utf16":
            return self._utf16_offsets
        if unit == "utf8":
            return self._utf8_offsets
        raise ValueError(f"unknown unit {unit!r}, expected one of {UNITS}")

    @cached_property
    def _utf16_offsets(self) -> list[int]:
        return _prefix_sums(self._value, _utf16_width)

    @cached_property
    def _utf8_offsets(self) -> list[int]:
        return _prefix_sums(self._value, _utf8_width)


def _prefix_sums(value: str, width: Callable[[str], int]) -> list[int]:
    out = [0]
    total = 0
    for ch in value:
        total += width(ch)
        out.append(total)
    return out
