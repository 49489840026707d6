"""String Tools: entity extraction and code-point-safe indexing for short text."""

from .analyzer import Analyzer, AnalyzerConfig
from .classify import (
    detect_language, is_only_whitespace_or_newlines, is_right_to_left, is_tweetable,
)
from .codec import decode, decode_text, encode, encode_text
from .config import create_analyzer, load_config, load_from_yaml
from .errors import (
    CharacterIndexError, ConfigError, DecodeError, RangeError, RecognizerUnavailable,
    StringToolsError,
)
from .extractor import EntityExtractor
from .language import LangdetectDetector, LanguageDetector, default_detector
from .patterns import PatternRecognizer, RegexRecognizer
from .text import IndexableText
from .types import EntityKind, Match, PrefixMatch, RawMatch, SemanticRange, TextAnalysis

__all__ = [
    "Analyzer", "AnalyzerConfig",
    "IndexableText", "EntityExtractor",
    "PatternRecognizer", "RegexRecognizer",
    "LanguageDetector", "LangdetectDetector", "default_detector",
    "is_only_whitespace_or_newlines", "is_tweetable", "is_right_to_left", "detect_language",
    "encode", "decode", "encode_text", "decode_text",
    "create_analyzer", "load_config", "load_from_yaml",
    "SemanticRange", "Match", "PrefixMatch", "RawMatch", "EntityKind", "TextAnalysis",
    "StringToolsError", "RangeError", "CharacterIndexError", "DecodeError", "ConfigError",
    "RecognizerUnavailable",
]
__version__ = "0.1.0"
