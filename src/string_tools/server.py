"""HTTP sidecar server for string-tools.

Runs as a lightweight stdlib HTTP server on localhost, so non-Python
callers can use the analyzer without spawning a process per request.

Endpoints:
    GET  /health          Health check
    POST /analyze         Full analysis
    POST /hashtags        Hashtags  (optional "unique", "include_prefix")
    POST /mentions        Mentions  (optional "unique", "include_prefix")
    POST /links           Links
    POST /dates           Dates
    POST /encode          Base64-encode UTF-8 text
    POST /decode          Base64-decode to UTF-8 text

All endpoints expect/return JSON.
Body format: {"text": "..."}
"""

from __future__ import annotations
import json
import logging
import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from . import codec
from .analyzer import Analyzer, AnalyzerConfig
from .errors import StringToolsError

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("STRING_TOOLS_PORT", "18792"))

# Shared state
_analyzer: Analyzer | None = None
_analyzer_lock = threading.Lock()


def _get_analyzer() -> Analyzer:
    global _analyzer
    if _analyzer is None:
        with _analyzer_lock:
            if _analyzer is None:
                use_presidio = os.environ.get("STRING_TOOLS_PRESIDIO", "") not in ("", "0")
                _analyzer = Analyzer(AnalyzerConfig(use_presidio=use_presidio))
    return _analyzer


class UnknownEndpoint(LookupError):
    """No POST handler for the requested path."""


POST_PATHS = frozenset({
    "/analyze", "/hashtags", "/mentions", "/links", "/dates", "/encode", "/decode",
})


def handle(path: str, body: Any) -> dict[str, Any]:
    """Dispatch one POST request body.

    Raises UnknownEndpoint for paths outside POST_PATHS and StringToolsError
    for a malformed body.
    """
    if path not in POST_PATHS:
        raise UnknownEndpoint(path)
    if not isinstance(body, dict):
        raise StringToolsError("request body must be a JSON object")
    text = body.get("text", "")
    if not isinstance(text, str):
        raise StringToolsError("'text' must be a string")

    if path == "/encode":
        return {"text": codec.encode_text(text)}
    if path == "/decode":
        return {"text": codec.decode_text(text)}

    analyzer = _get_analyzer()
    if path == "/analyze":
        return analyzer.analyze(text).to_dict()

    ex = analyzer.extractor(text)
    if path in ("/hashtags", "/mentions"):
        include_prefix = bool(body.get("include_prefix", True))
        if path == "/hashtags":
            finder = ex.find_unique_hashtags if body.get("unique") else ex.find_hashtags
        else:
            finder = ex.find_unique_mentions if body.get("unique") else ex.find_mentions
        return {"matches": [
            {"text": m.text, "start": m.range.start, "end": m.range.end}
            for m in finder(include_prefix)
        ]}
    if path == "/links":
        return {"matches": [
            {"text": m.text, "start": m.range.start, "end": m.range.end, "url": m.payload.geturl()}
            for m in ex.find_links()
        ]}
    if path == "/dates":
        return {"matches": [
            {"text": m.text, "start": m.range.start, "end": m.range.end,
             "date": m.payload.isoformat()}
            for m in ex.find_dates()
        ]}
    raise UnknownEndpoint(path)


class StringToolsHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the string-tools sidecar."""

    def _read_json(self) -> Any:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        return json.loads(body) if body else {}

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - " + format, self.address_string(), *args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok", "analyzer_ready": _analyzer is not None})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()
            self._respond(200, handle(self.path, body))
        except UnknownEndpoint:
            self._respond(404, {"error": "not found"})
        except (StringToolsError, ValueError) as e:
            # ValueError: malformed JSON or non-UTF-8 body
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("request to %s failed", self.path)
            self._respond(500, {"error": str(e)})


def serve(port: int = DEFAULT_PORT) -> None:
    """Start the string-tools HTTP sidecar."""
    server = ThreadingHTTPServer(("127.0.0.1", port), StringToolsHandler)
    logger.info("string-tools sidecar listening on http://127.0.0.1:%d", port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
        server.shutdown()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="string-tools HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    serve(port=args.port)
