"""Exception hierarchy.

Every error raised by the toolkit derives from StringToolsError and also
from the closest builtin, so callers can catch either.
"""

from __future__ import annotations


class StringToolsError(Exception):
    """Base class for all string-tools errors."""


class RangeError(StringToolsError, ValueError):
    """A semantic range is negative, inverted, or past the end of the text."""


class CharacterIndexError(StringToolsError, IndexError):
    """A single character index is out of bounds."""


class DecodeError(StringToolsError, ValueError):
    """Malformed base64 input, or decoded bytes that are not UTF-8."""


class RecognizerUnavailable(StringToolsError, RuntimeError):
    """A recognizer or detector capability is not configured or not installed."""


class ConfigError(StringToolsError, ValueError):
    """A configuration value is missing or out of range."""
