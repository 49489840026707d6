"""Analyzer: the one-call API.  Layered: regex first, Presidio optional.

Usage:
    from string_tools import Analyzer

    analyzer = Analyzer()          # reusable, thread-safe after init
    result = analyzer.analyze("Ping @ana about #launch on 2024-03-15")
    result.mentions                # ["@ana"]
    result.dates                   # ["2024-03-15T00:00:00"]
    result.is_tweetable            # True
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from .classify import (
    LINK_WEIGHT, RTL_LANGUAGES, TWEET_LIMIT,
    detect_language, is_only_whitespace_or_newlines, is_tweetable,
)
from .extractor import EntityExtractor
from .language import LanguageDetector, default_detector
from .patterns import PatternRecognizer, RegexRecognizer
from .text import IndexableText
from .types import TextAnalysis

logger = logging.getLogger(__name__)


@dataclass
class AnalyzerConfig:
    """Configuration for the Analyzer."""
    use_presidio: bool = False        # Layer 2 (NER) for links/dates
    language: str = "en"              # Presidio NLP model language
    score_threshold: float = 0.35     # minimum confidence for Presidio
    tweet_limit: int = TWEET_LIMIT
    link_weight: int = LINK_WEIGHT
    date_order: str = "MDY"           # for ambiguous numeric dates
    detect_language: bool = True


class Analyzer:
    """Runs every extraction and predicate over a piece of text."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        recognizer: PatternRecognizer | None = None,
        detector: LanguageDetector | None = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        self.recognizer = recognizer or self._build_recognizer()
        self._detector = detector

    def _build_recognizer(self) -> PatternRecognizer:
        if self.config.use_presidio:
            from .presidio_layer import PresidioRecognizer
            return PresidioRecognizer(
                language=self.config.language,
                score_threshold=self.config.score_threshold,
                date_order=self.config.date_order,
            )
        return RegexRecognizer(date_order=self.config.date_order)

    @property
    def detector(self) -> LanguageDetector:
        if self._detector is None:
            self._detector = default_detector()
        return self._detector

    def extractor(self, text: IndexableText | str) -> EntityExtractor:
        return EntityExtractor(text, self.recognizer)

    def analyze(self, text: str) -> TextAnalysis:
        """Extract entities and classify ``text``."""
        indexed = IndexableText(text)
        ex = self.extractor(indexed)

        links = ex.find_links()
        language = None
        if self.config.detect_language:
            language = detect_language(indexed, self.detector)

        result = TextAnalysis(
            text=text,
            length=len(indexed),
            utf16_length=indexed.utf16_length,
            links=[m.payload.geturl() for m in links],
            dates=[m.payload.isoformat() for m in ex.find_dates()],
            hashtags=[m.text for m in ex.find_hashtags()],
            mentions=[m.text for m in ex.find_mentions()],
            is_email_like=ex.is_email_like(),
            is_tweetable=is_tweetable(
                indexed,
                limit=self.config.tweet_limit,
                link_weight=self.config.link_weight,
                extractor=ex,
            ),
            is_blank=is_only_whitespace_or_newlines(indexed),
            language=language,
            is_right_to_left=language in RTL_LANGUAGES,
        )
        logger.debug(
            "analyzed %d chars: %d links, %d dates, %d hashtags, %d mentions",
            result.length, len(result.links), len(result.dates),
            len(result.hashtags), len(result.mentions),
        )
        return result

    def analyze_many(self, texts: list[str]) -> list[TextAnalysis]:
        return [self.analyze(t) for t in texts]
