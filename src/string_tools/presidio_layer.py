"""Layer 2: Presidio-backed recognizer for links and dates.

Catches free-form dates ("next Tuesday", "the 3rd of May") and URL shapes
the regex layer misses.  Uses spaCy under the hood, so the engine is
expensive: it is built once per language and shared.
"""

from __future__ import annotations
import logging
import threading
from typing import TYPE_CHECKING

from .errors import RecognizerUnavailable
from .patterns import resolve_date, resolve_url
from .types import EntityKind, RawMatch

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

# Lazy singletons, one per language; don't load spaCy until first use
_engines: dict[str, AnalyzerEngine] = {}
_engines_lock = threading.Lock()

# Presidio entity types feeding each entity kind
ENTITIES_BY_KIND: dict[EntityKind, list[str]] = {
    EntityKind.LINK: ["URL", "EMAIL_ADDRESS"],
    EntityKind.DATE: ["DATE_TIME"],
}


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine for ``language``.

    At most one engine is constructed per language, even when several
    threads ask for it at once.
    """
    engine = _engines.get(language)
    if engine is not None:
        return engine
    with _engines_lock:
        engine = _engines.get(language)
        if engine is None:
            try:
                from presidio_analyzer import AnalyzerEngine
                from presidio_analyzer.nlp_engine import NlpEngineProvider
            except ImportError as exc:
                raise RecognizerUnavailable(
                    "presidio-analyzer is not installed; "
                    "install string-tools[presidio] or use the regex recognizer"
                ) from exc

            logger.info("building Presidio analyzer engine for %r", language)
            provider = NlpEngineProvider(nlp_configuration={
                "nlp_engine_name": "spacy",
                "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
            })
            engine = AnalyzerEngine(
                nlp_engine=provider.create_engine(),
                supported_languages=[language],
            )
            _engines[language] = engine
    return engine


def _normalize_link(entity_type: str, candidate: str) -> str:
    if entity_type == "EMAIL_ADDRESS":
        return candidate if candidate.lower().startswith("mailto:") else "mailto:" + candidate
    if "://" not in candidate and not candidate.lower().startswith("mailto:"):
        return "http://" + candidate
    return candidate


class PresidioRecognizer:
    """PatternRecognizer backed by Presidio's AnalyzerEngine."""

    unit = "codepoint"     # Presidio reports Python str offsets

    def __init__(
        self,
        *,
        language: str = "en",
        score_threshold: float = 0.35,
        date_order: str = "MDY",
    ) -> None:
        self.language = language
        self.score_threshold = score_threshold
        self.date_order = date_order

    def scan(self, text: str, kind: EntityKind) -> list[RawMatch]:
        """Run Presidio analysis on text for one entity kind.

        Args:
            text: Input text to scan.
            kind: LINK or DATE.
        """
        engine = _get_engine(self.language)
        results = engine.analyze(
            text=text,
            language=self.language,
            entities=ENTITIES_BY_KIND[kind],
            score_threshold=self.score_threshold,
        )

        matches: list[RawMatch] = []
        for r in results:
            candidate = text[r.start:r.end]
            if kind is EntityKind.LINK:
                payload = resolve_url(_normalize_link(r.entity_type, candidate))
            else:
                payload = resolve_date(candidate, date_order=self.date_order)
            matches.append(RawMatch(start=r.start, end=r.end, payload=payload))

        logger.debug("presidio %s scan: %d candidates", kind.value, len(matches))
        return sorted(matches, key=lambda m: m.start)
