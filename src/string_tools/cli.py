"""CLI interface for string-tools.

Usage:
    # Full analysis (stdin: text, stdout: JSON)
    echo 'Ping @ana about #launch, see https://acme.io' | \
        python -m string_tools.cli analyze

    # Unique hashtags without the leading '#'
    echo '#acme is #cool #acme' | python -m string_tools.cli hashtags --unique --no-prefix

    # Base64
    echo -n 'hello' | python -m string_tools.cli encode
    echo -n 'aGVsbG8=' | python -m string_tools.cli decode
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any

from . import codec
from .analyzer import Analyzer
from .classify import detect_language
from .config import create_analyzer, load_from_yaml
from .errors import StringToolsError
from .types import Match, PrefixMatch

logger = logging.getLogger(__name__)


def _build_analyzer(args: argparse.Namespace) -> Analyzer:
    config = load_from_yaml(args.config) if args.config else {}
    if args.presidio:
        config["use_presidio"] = True
    return create_analyzer(config)


def _emit(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _prefix_match_dict(m: PrefixMatch) -> dict[str, Any]:
    return {"text": m.text, "start": m.range.start, "end": m.range.end}


def _match_dict(m: Match[Any], value: str) -> dict[str, Any]:
    return {"text": m.text, "start": m.range.start, "end": m.range.end, "value": value}


def cmd_analyze(args: argparse.Namespace) -> None:
    """Full analysis of the text on stdin."""
    analyzer = _build_analyzer(args)
    _emit(analyzer.analyze(sys.stdin.read()).to_dict())


def cmd_hashtags(args: argparse.Namespace) -> None:
    ex = _build_analyzer(args).extractor(sys.stdin.read())
    found = (ex.find_unique_hashtags if args.unique else ex.find_hashtags)(not args.no_prefix)
    _emit([_prefix_match_dict(m) for m in found])


def cmd_mentions(args: argparse.Namespace) -> None:
    ex = _build_analyzer(args).extractor(sys.stdin.read())
    found = (ex.find_unique_mentions if args.unique else ex.find_mentions)(not args.no_prefix)
    _emit([_prefix_match_dict(m) for m in found])


def cmd_links(args: argparse.Namespace) -> None:
    ex = _build_analyzer(args).extractor(sys.stdin.read())
    _emit([_match_dict(m, m.payload.geturl()) for m in ex.find_links()])


def cmd_dates(args: argparse.Namespace) -> None:
    ex = _build_analyzer(args).extractor(sys.stdin.read())
    _emit([_match_dict(m, m.payload.isoformat()) for m in ex.find_dates()])


def cmd_language(args: argparse.Namespace) -> None:
    analyzer = _build_analyzer(args)
    language = detect_language(sys.stdin.read(), analyzer.detector)
    sys.stdout.write(f"{language or 'und'}\n")


def cmd_encode(args: argparse.Namespace) -> None:
    sys.stdout.write(codec.encode(sys.stdin.buffer.read()) + "\n")


def cmd_decode(args: argparse.Namespace) -> None:
    sys.stdout.buffer.write(codec.decode(sys.stdin.read().strip()))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="string_tools",
        description="Entity extraction and classification for short text",
    )
    parser.add_argument("--config", default="", help="YAML config file")
    parser.add_argument("--presidio", action="store_true", help="Use Presidio for links/dates")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("analyze", help="Full JSON analysis (stdin)")
    for name in ("hashtags", "mentions"):
        p = sub.add_parser(name, help=f"List {name} (stdin)")
        p.add_argument("--unique", action="store_true", help="First occurrence of each only")
        p.add_argument("--no-prefix", action="store_true", help="Strip the leading # or @")
    sub.add_parser("links", help="List links (stdin)")
    sub.add_parser("dates", help="List dates (stdin)")
    sub.add_parser("language", help="Detect language (stdin)")
    sub.add_parser("encode", help="Base64-encode stdin")
    sub.add_parser("decode", help="Base64-decode stdin")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cmds = {
        "analyze": cmd_analyze,
        "hashtags": cmd_hashtags,
        "mentions": cmd_mentions,
        "links": cmd_links,
        "dates": cmd_dates,
        "language": cmd_language,
        "encode": cmd_encode,
        "decode": cmd_decode,
    }
    try:
        cmds[args.command](args)
    except StringToolsError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
