"""EntityExtractor: links, dates, hashtags and mentions over IndexableText.

Every find_* call is an independent left-to-right scan.  Nothing is cached
between calls, so call order never matters and repeated calls return equal
results.  Returned matches own their text and stay valid after the
IndexableText is gone.

Usage:
    from string_tools import EntityExtractor, IndexableText, RegexRecognizer

    ex = EntityExtractor(IndexableText("#acme is #cool #acme"), RegexRecognizer())
    [m.text for m in ex.find_unique_hashtags()]    # ["#acme", "#cool"]
"""

from __future__ import annotations
import logging
import re
from datetime import datetime
from functools import lru_cache
from typing import Any
from urllib.parse import SplitResult

from .errors import RecognizerUnavailable
from .patterns import PatternRecognizer
from .text import IndexableText
from .types import EntityKind, Match, PrefixMatch, RawMatch, SemanticRange

logger = logging.getLogger(__name__)

HASHTAG_PREFIX = "#"
MENTION_PREFIX = "@"


@lru_cache(maxsize=64)
def _compile(pattern: str, flags: int) -> re.Pattern:
    return re.compile(pattern, flags)


def scan_regex(text: str, pattern: str, flags: int = re.IGNORECASE) -> list[Match[None]] | None:
    """Every non-overlapping match of ``pattern``, left to right.

    Returns None when ``pattern`` does not compile.
    """
    try:
        compiled = _compile(pattern, flags)
    except re.error as exc:
        logger.debug("invalid pattern %r: %s", pattern, exc)
        return None
    return [
        Match(range=SemanticRange(m.start(), m.end()), text=m.group())
        for m in compiled.finditer(text)
    ]


def scan_prefixed(text: str, prefix: str, *, include_prefix: bool = True) -> list[PrefixMatch]:
    """Find every ``prefix`` followed by a run of word characters.

    The reported range always spans the prefix; ``include_prefix=False``
    only strips it from ``text``.
    """
    if not prefix:
        raise ValueError("prefix must be a non-empty string")
    # \w is Unicode-aware for str patterns: letters, digits, underscore
    found = scan_regex(text, re.escape(prefix) + r"\w+")
    return [
        PrefixMatch(
            range=m.range,
            text=m.text if include_prefix else m.text[len(prefix):],
            includes_prefix=include_prefix,
        )
        for m in found
    ]


def unique_by_text(matches: list[PrefixMatch]) -> list[PrefixMatch]:
    """Drop repeats (case-sensitive), keeping first occurrences in order."""
    seen: set[str] = set()
    out: list[PrefixMatch] = []
    for m in matches:
        if m.text not in seen:
            seen.add(m.text)
            out.append(m)
    return out


def resolve_matches(text: IndexableText, raw: list[RawMatch], unit: str) -> list[Match[Any]]:
    """Turn recognizer output into Matches.

    Converts ``unit`` offsets to code points, drops candidates without a
    payload, and drops any candidate overlapping an earlier-starting one.
    """
    located: list[tuple[SemanticRange, Any]] = []
    dropped = 0
    for r in raw:
        if r.payload is None:
            dropped += 1
            continue
        located.append((text.from_raw_range(r.start, r.end, unit), r.payload))
    if dropped:
        logger.debug("dropped %d candidates without a payload", dropped)

    # Earlier start wins; on a tie the longer span wins
    located.sort(key=lambda item: (item[0].start, -len(item[0])))
    out: list[Match[Any]] = []
    for rng, payload in located:
        if out and rng.overlaps(out[-1].range):
            continue
        out.append(Match(range=rng, text=text.substring(rng), payload=payload))
    return out


class EntityExtractor:
    """Entity scans over one IndexableText.

    ``recognizer`` backs find_links/find_dates; without one those raise
    RecognizerUnavailable rather than returning nothing.
    """

    def __init__(
        self,
        text: IndexableText | str,
        recognizer: PatternRecognizer | None = None,
    ) -> None:
        self.text = text if isinstance(text, IndexableText) else IndexableText(text)
        self.recognizer = recognizer

    # ------------------------------------------------------------------
    # Recognizer-backed scans
    # ------------------------------------------------------------------

    def _scan(self, kind: EntityKind) -> list[Match[Any]]:
        if self.recognizer is None:
            raise RecognizerUnavailable(f"no recognizer configured for {kind.value} scans")
        raw = self.recognizer.scan(self.text.value, kind)
        return resolve_matches(self.text, raw, self.recognizer.unit)

    def find_links(self) -> list[Match[SplitResult]]:
        return self._scan(EntityKind.LINK)

    def links(self) -> list[str]:
        """Absolute URL strings for every link, e.g. "mailto:a@b.com"."""
        return [m.payload.geturl() for m in self.find_links()]

    def find_dates(self) -> list[Match[datetime]]:
        return self._scan(EntityKind.DATE)

    def dates(self) -> list[datetime]:
        return [m.payload for m in self.find_dates()]

    def count_links(self) -> int:
        return len(self.find_links())

    def contains_link(self) -> bool:
        return bool(self.find_links())

    def contains_date(self) -> bool:
        return bool(self.find_dates())

    def is_email_like(self) -> bool:
        """True when the first link found is a mailto: link.

        Not an e-mail syntax validator: "see a@b.com" is email-like too.
        """
        found = self.find_links()
        return bool(found) and found[0].payload.scheme == "mailto"

    # ------------------------------------------------------------------
    # Pattern scans
    # ------------------------------------------------------------------

    def find_matches(self, pattern: str, flags: int = re.IGNORECASE) -> list[Match[None]] | None:
        """Matches of an arbitrary regex, None when it is not a valid pattern."""
        return scan_regex(self.text.value, pattern, flags)

    def find_prefixed(self, prefix: str, *, include_prefix: bool = True) -> list[PrefixMatch]:
        return scan_prefixed(self.text.value, prefix, include_prefix=include_prefix)

    def find_hashtags(self, include_prefix: bool = True) -> list[PrefixMatch]:
        return self.find_prefixed(HASHTAG_PREFIX, include_prefix=include_prefix)

    def find_mentions(self, include_prefix: bool = True) -> list[PrefixMatch]:
        return self.find_prefixed(MENTION_PREFIX, include_prefix=include_prefix)

    def find_unique_hashtags(self, include_prefix: bool = True) -> list[PrefixMatch]:
        return unique_by_text(self.find_hashtags(include_prefix))

    def find_unique_mentions(self, include_prefix: bool = True) -> list[PrefixMatch]:
        return unique_by_text(self.find_mentions(include_prefix))
