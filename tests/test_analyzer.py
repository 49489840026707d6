"""Tests for the Analyzer façade, config loader, CLI and sidecar dispatch."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from string_tools import (
    Analyzer, AnalyzerConfig, ConfigError, DecodeError, RegexRecognizer, StringToolsError,
)
from string_tools import cli, server
from string_tools.config import create_analyzer, load_config, load_from_yaml


class FakeDetector:
    def __init__(self, answer="en"):
        self.answer = answer

    def detect(self, text):
        return self.answer


# ── Analyzer ─────────────────────────────────────────────────────────

def test_analyze_collects_everything():
    a = Analyzer(detector=FakeDetector("en"))
    result = a.analyze("Ping @ana about #launch on 2024-03-15, see https://acme.io")
    assert result.mentions == ["@ana"]
    assert result.hashtags == ["#launch"]
    assert result.links == ["https://acme.io"]
    assert result.dates[0].startswith("2024-03-15")
    assert result.is_tweetable
    assert not result.is_email_like
    assert not result.is_blank
    assert result.language == "en"
    assert not result.is_right_to_left


def test_analyze_lengths():
    result = Analyzer(detector=FakeDetector()).analyze("hi \U0001F600")
    assert result.length == 4
    assert result.utf16_length == 5
    assert result.language is None     # too short to detect


def test_analyze_rtl():
    result = Analyzer(detector=FakeDetector("he")).analyze("שלום לכולם")
    assert result.is_right_to_left


def test_analyze_email():
    result = Analyzer(detector=FakeDetector()).analyze("ana@acme.io")
    assert result.is_email_like
    assert result.links == ["mailto:ana@acme.io"]


def test_language_detection_can_be_disabled():
    a = Analyzer(AnalyzerConfig(detect_language=False), detector=FakeDetector("ar"))
    result = a.analyze("long enough text")
    assert result.language is None
    assert not result.is_right_to_left


def test_tweet_settings_from_config():
    a = Analyzer(AnalyzerConfig(tweet_limit=5, detect_language=False))
    assert not a.analyze("abcdef").is_tweetable
    assert a.analyze("abcde").is_tweetable


def test_default_recognizer_is_regex():
    assert isinstance(Analyzer().recognizer, RegexRecognizer)


def test_to_dict_is_json_serializable():
    result = Analyzer(detector=FakeDetector()).analyze("#a on 2024-01-02")
    data = json.loads(json.dumps(result.to_dict()))
    assert data["hashtags"] == ["#a"]


def test_analyze_many():
    a = Analyzer(AnalyzerConfig(detect_language=False))
    results = a.analyze_many(["#a", "@b"])
    assert [r.hashtags for r in results] == [["#a"], []]


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg["use_presidio"] is False
    assert cfg["tweet_limit"] == 140
    assert cfg["link_weight"] == 23
    assert cfg["date_order"] == "MDY"


def test_load_config_nested():
    cfg = load_config({"string_tools": {
        "date_order": "dmy",
        "tweet": {"limit": 280},
        "detect_language": False,
    }})
    assert cfg["date_order"] == "DMY"
    assert cfg["tweet_limit"] == 280
    assert cfg["link_weight"] == 23
    assert cfg["detect_language"] is False


def test_load_config_bad_date_order():
    with pytest.raises(ConfigError):
        load_config({"date_order": "XYZ"})


def test_config_errors_are_toolkit_errors():
    with pytest.raises(StringToolsError):
        load_config({"tweet": {"limit": "many"}})
    with pytest.raises(ConfigError):
        load_config(["not", "a", "mapping"])


def test_load_from_yaml(tmp_path):
    path = tmp_path / "tools.yaml"
    path.write_text(
        "string_tools:\n"
        "  score_threshold: 0.5\n"
        "  tweet:\n"
        "    link_weight: 30\n",
        encoding="utf-8",
    )
    cfg = load_from_yaml(path)
    assert cfg["score_threshold"] == 0.5
    assert cfg["link_weight"] == 30


def test_create_analyzer():
    a = create_analyzer({"tweet": {"limit": 10}, "date_order": "DMY"})
    assert a.config.tweet_limit == 10
    assert a.recognizer.date_order == "DMY"


# ── CLI ──────────────────────────────────────────────────────────────

def test_cli_unique_hashtags(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("#acme is #cool #acme"))
    assert cli.main(["hashtags", "--unique", "--no-prefix"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [m["text"] for m in out] == ["acme", "cool"]
    assert out[0]["start"] == 0 and out[0]["end"] == 5


def test_cli_links(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("see www.acme.io"))
    assert cli.main(["links"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == [{"text": "www.acme.io", "start": 4, "end": 15, "value": "http://www.acme.io"}]


def test_cli_analyze_with_config(monkeypatch, capsys, tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("detect_language: false\n", encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", io.StringIO("@ana #x"))
    assert cli.main(["--config", str(path), "analyze"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["mentions"] == ["@ana"]
    assert out["language"] is None


def test_cli_bad_config_exits_with_error(monkeypatch, capsys, tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("date_order: XYZ\n", encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", io.StringIO("#x"))
    assert cli.main(["--config", str(path), "hashtags"]) == 1
    assert "date_order" in capsys.readouterr().err


def test_cli_decode_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("not base64!"))
    assert cli.main(["decode"]) == 1
    assert "invalid base64" in capsys.readouterr().err


# ── Sidecar dispatch ─────────────────────────────────────────────────

def test_server_hashtags():
    out = server.handle("/hashtags", {"text": "#a #b #a", "unique": True})
    assert [m["text"] for m in out["matches"]] == ["#a", "#b"]


def test_server_mentions_without_prefix():
    out = server.handle("/mentions", {"text": "@x", "include_prefix": False})
    assert out["matches"] == [{"text": "x", "start": 0, "end": 2}]


def test_server_codec():
    assert server.handle("/encode", {"text": "hi"}) == {"text": "aGk="}
    assert server.handle("/decode", {"text": "aGk="}) == {"text": "hi"}
    with pytest.raises(DecodeError):
        server.handle("/decode", {"text": "%%%"})


def test_server_unknown_path():
    with pytest.raises(server.UnknownEndpoint):
        server.handle("/nope", {"text": "x"})
    assert not issubclass(server.UnknownEndpoint, KeyError)


def test_server_rejects_non_object_body():
    with pytest.raises(StringToolsError):
        server.handle("/hashtags", ["x"])
    with pytest.raises(StringToolsError):
        server.handle("/hashtags", {"text": 5})
