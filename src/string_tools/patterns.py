"""Layer 1: fast regex recognizers for links and dates.

These need no model and are the default PatternRecognizer.  Offsets are
reported in code points, straight from ``re``.
"""

from __future__ import annotations
import logging
import re
from datetime import datetime
from typing import Callable, Protocol, runtime_checkable
from urllib.parse import SplitResult, urlsplit

import dateparser

from .types import EntityKind, RawMatch

logger = logging.getLogger(__name__)

# Characters that end a sentence rather than a URL
_TRAILING_PUNCT = ".,;:!?'\">"

# Closing brackets are trimmed only when unbalanced within the URL
_CLOSERS = {")": "(", "]": "[", "}": "{"}

_URL_BODY = r"[^\s<>\"']+"

_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)

# Each link pattern: (compiled_regex, normalizer turning the hit into a URL string)
_LINK_PATTERNS: list[tuple[re.Pattern, Callable[[str], str]]] = [
    # Explicit scheme
    (re.compile(r"\b(?:https?|ftp)://" + _URL_BODY, re.IGNORECASE), lambda s: s),

    # mailto: links
    (re.compile(r"\bmailto:" + _URL_BODY, re.IGNORECASE), lambda s: s),

    # Bare www. hosts
    (re.compile(r"\bwww\.[a-zA-Z0-9\-]+\.[^\s<>\"']+", re.IGNORECASE),
     lambda s: "http://" + s),

    # Bare email addresses are links with a mailto scheme
    (re.compile(r"\b[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}\b"),
     lambda s: "mailto:" + s),
]

_DATE_PATTERNS: list[re.Pattern] = [
    # ISO and numeric: YYYY-MM-DD, DD/MM/YYYY, MM/DD/YYYY, DD.MM.YYYY
    re.compile(
        r"\b(?:\d{4}[\-/.]\d{1,2}[\-/.]\d{1,2}|\d{1,2}[\-/.]\d{1,2}[\-/.]\d{4})\b"
    ),

    # Month name first: March 15, 2024 / Mar 15 2024 / March 15
    re.compile(
        r"\b" + _MONTH + r"\.?\s+\d{1,2}(?:st|nd|rd|th)?(?:,?\s+\d{4})?\b",
        re.IGNORECASE,
    ),

    # Day first: 15 March 2024 / 15th Mar
    re.compile(
        r"\b\d{1,2}(?:st|nd|rd|th)?\s+" + _MONTH + r"\.?(?:,?\s+\d{4})?\b",
        re.IGNORECASE,
    ),
]

_YEAR_FIRST = re.compile(r"\d{4}[\-/.]")


@runtime_checkable
class PatternRecognizer(Protocol):
    """Scans text for one entity class.

    ``unit`` names the offset unit of the returned RawMatch values:
    "codepoint", "utf16" or "utf8".
    """
    unit: str

    def scan(self, text: str, kind: EntityKind) -> list[RawMatch]: ...


def resolve_url(candidate: str) -> SplitResult | None:
    """Parse a URL string, None when it has no usable scheme/target."""
    try:
        url = urlsplit(candidate)
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return None
    if not url.scheme:
        return None
    if url.scheme == "mailto":
        return url if "@" in url.path else None
    return url if url.netloc else None


def resolve_date(candidate: str, *, date_order: str = "MDY") -> datetime | None:
    """Parse a date string with dateparser, None when it isn't a real date."""
    if _YEAR_FIRST.match(candidate):
        date_order = "YMD"
    return dateparser.parse(
        candidate,
        languages=["en"],
        settings={"DATE_ORDER": date_order, "PREFER_DAY_OF_MONTH": "first"},
    )


def _trim_trailing(text: str, start: int, end: int) -> int:
    while end > start:
        ch = text[end - 1]
        if ch in _CLOSERS:
            span = text[start:end]
            if span.count(_CLOSERS[ch]) >= span.count(ch):
                break
        elif ch not in _TRAILING_PUNCT:
            break
        end -= 1
    return end


class RegexRecognizer:
    """PatternRecognizer backed by the regexes above."""

    unit = "codepoint"

    def __init__(self, *, date_order: str = "MDY") -> None:
        self.date_order = date_order

    def scan(self, text: str, kind: EntityKind) -> list[RawMatch]:
        if kind is EntityKind.LINK:
            return self._scan_links(text)
        if kind is EntityKind.DATE:
            return self._scan_dates(text)
        raise ValueError(f"unsupported entity kind: {kind!r}")

    def _scan_links(self, text: str) -> list[RawMatch]:
        matches: list[RawMatch] = []
        for pattern, normalize in _LINK_PATTERNS:
            for m in pattern.finditer(text):
                end = _trim_trailing(text, m.start(), m.end())
                if end == m.start():
                    continue
                matches.append(RawMatch(
                    start=m.start(),
                    end=end,
                    payload=resolve_url(normalize(text[m.start():end])),
                ))
        logger.debug("regex link scan: %d candidates", len(matches))
        return matches

    def _scan_dates(self, text: str) -> list[RawMatch]:
        matches: list[RawMatch] = []
        for pattern in _DATE_PATTERNS:
            for m in pattern.finditer(text):
                matches.append(RawMatch(
                    start=m.start(),
                    end=m.end(),
                    payload=resolve_date(m.group(), date_order=self.date_order),
                ))
        logger.debug("regex date scan: %d candidates", len(matches))
        return matches
