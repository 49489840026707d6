"""YAML/dict config loader for string-tools.

Supports loading from a YAML file or a plain dict (for embedding
in a larger application config).

Example YAML:

    string_tools:
      use_presidio: false
      language: en
      score_threshold: 0.35
      date_order: DMY
      detect_language: true
      tweet:
        limit: 280
        link_weight: 23
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .analyzer import Analyzer, AnalyzerConfig
from .classify import LINK_WEIGHT, TWEET_LIMIT
from .errors import ConfigError

_DATE_ORDERS = {"MDY", "DMY", "YMD", "YDM", "MYD", "DYM"}


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "string_tools" key or flat
    if isinstance(data, dict) and "string_tools" in data:
        data = data["string_tools"] or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    tweet = data.get("tweet") or {}
    date_order = str(data.get("date_order", "MDY")).upper()
    if date_order not in _DATE_ORDERS:
        raise ConfigError(f"date_order must be one of {sorted(_DATE_ORDERS)}, got {date_order!r}")

    try:
        score_threshold = float(data.get("score_threshold", 0.35))
        tweet_limit = int(tweet.get("limit", TWEET_LIMIT))
        link_weight = int(tweet.get("link_weight", LINK_WEIGHT))
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"invalid numeric setting: {exc}") from exc

    return {
        "use_presidio": bool(data.get("use_presidio", False)),
        "language": data.get("language", "en"),
        "score_threshold": score_threshold,
        "tweet_limit": tweet_limit,
        "link_weight": link_weight,
        "date_order": date_order,
        "detect_language": bool(data.get("detect_language", True)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"cannot parse {path}: {exc}") from exc
    return load_config(data)


def create_analyzer(config: dict[str, Any] | None = None) -> Analyzer:
    """Create a fully configured Analyzer from a config dict."""
    cfg = config if config and "tweet_limit" in config else load_config(config)
    return Analyzer(AnalyzerConfig(**cfg))
