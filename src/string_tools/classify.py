"""Classification predicates built on the extractor."""

from __future__ import annotations
import logging

from .extractor import EntityExtractor
from .language import LanguageDetector
from .patterns import RegexRecognizer
from .text import IndexableText

logger = logging.getLogger(__name__)

TWEET_LIMIT = 140
LINK_WEIGHT = 23        # every link counts as a shortened t.co URL
RTL_LANGUAGES = frozenset({"ar", "he"})
MIN_DETECT_LENGTH = 4   # shorter text is never sent to the detector


def _as_text(text: IndexableText | str) -> IndexableText:
    return text if isinstance(text, IndexableText) else IndexableText(text)


def is_only_whitespace_or_newlines(text: IndexableText | str) -> bool:
    # str.strip() with no argument strips the full Unicode whitespace class
    return len(str(text).strip()) == 0


def is_tweetable(
    text: IndexableText | str,
    *,
    limit: int = TWEET_LIMIT,
    link_weight: int = LINK_WEIGHT,
    extractor: EntityExtractor | None = None,
) -> bool:
    """Whether the text fits in a tweet.

    With any link present only the weighted link budget is checked and
    the text's own length is ignored.  Without links the text must be
    1..limit characters and not blank.
    """
    text = _as_text(text)
    if extractor is None:
        extractor = EntityExtractor(text, RegexRecognizer())

    links_length = extractor.count_links() * link_weight
    if links_length != 0:
        return limit - links_length >= 0
    return 0 < len(text) <= limit and not is_only_whitespace_or_newlines(text)


def detect_language(text: IndexableText | str, detector: LanguageDetector) -> str | None:
    """Language tag for text, None when it is too short to judge."""
    text = _as_text(text)
    if len(text) <= MIN_DETECT_LENGTH:
        return None
    language = detector.detect(text.value)
    logger.debug("detected language %r", language)
    return language


def is_right_to_left(text: IndexableText | str, detector: LanguageDetector) -> bool:
    return detect_language(text, detector) in RTL_LANGUAGES
