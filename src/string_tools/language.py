"""Language detection capability.

langdetect loads ~50 language profiles from disk before it can detect
anything, so the profile factory is built once per process, behind a lock,
and shared read-only afterwards.  Each detect() call gets its own Detector
from the factory, which keeps concurrent calls independent.
"""

from __future__ import annotations
import logging
import threading
from typing import Protocol, runtime_checkable

from langdetect.detector import Detector
from langdetect.detector_factory import PROFILES_DIRECTORY, DetectorFactory
from langdetect.lang_detect_exception import LangDetectException

logger = logging.getLogger(__name__)

UNDETERMINED = "und"

_factory: DetectorFactory | None = None
_factory_lock = threading.Lock()

_default_detector: LangdetectDetector | None = None


@runtime_checkable
class LanguageDetector(Protocol):
    """Returns an ISO 639-1 tag such as "en" or "ar", or "und"."""

    def detect(self, text: str) -> str: ...


def _get_factory() -> DetectorFactory:
    """Lazy-init the shared langdetect profile factory."""
    global _factory
    if _factory is None:
        with _factory_lock:
            if _factory is None:
                logger.info("loading langdetect profiles from %s", PROFILES_DIRECTORY)
                factory = DetectorFactory()
                factory.load_profile(PROFILES_DIRECTORY)
                _factory = factory
    return _factory


class LangdetectDetector:
    """LanguageDetector backed by langdetect."""

    def __init__(self, *, seed: int = 0) -> None:
        self.seed = seed

    def _create_detector(self, text: str) -> Detector:
        detector = _get_factory().create()
        # Per-detector seed: langdetect is otherwise non-deterministic
        detector.seed = self.seed
        detector.append(text)
        return detector

    def detect(self, text: str) -> str:
        detector = self._create_detector(text)
        try:
            return detector.detect()
        except LangDetectException:
            # No usable features, e.g. digits or punctuation only
            return UNDETERMINED


def default_detector() -> LangdetectDetector:
    """Shared detector handle used when none is passed in explicitly."""
    global _default_detector
    if _default_detector is None:
        _default_detector = LangdetectDetector()
    return _default_detector
