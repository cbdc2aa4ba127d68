"""HTTP sidecar server for sensitive-scan.

Runs as a lightweight stdlib HTTP server on localhost so a host service
can call the detector without spawning a process per request.

Endpoints:
    POST /detect          — Scan text, return the scan result
    POST /redact-text     — Scan text, return it with findings masked
    POST /mask            — Mask a single value for a type id
    GET  /health          — Health check
    GET  /rules           — Structured rule ids in priority order

All endpoints expect/return JSON.
Body format: {"text": "..."} or {"type": "...", "value": "..."}
"""

from __future__ import annotations
import json
import logging
import os
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .config import create_detector, load_from_yaml
from .detector import Detector, redact
from .masking import mask

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("SENSITIVE_SCAN_PORT", "18792"))
DEFAULT_CONFIG = os.environ.get("SENSITIVE_SCAN_CONFIG", "")

# Shared state (read-only once built)
_detector: Detector | None = None
_config_path: str = DEFAULT_CONFIG


def _get_detector() -> Detector:
    global _detector
    if _detector is None:
        config = load_from_yaml(_config_path) if _config_path else {}
        _detector = create_detector(config)
    return _detector


class BadRequest(ValueError):
    """Request body is not what the endpoint expects."""


class ScanHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the sensitive-scan sidecar."""

    def _read_json(self) -> dict[str, Any]:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            raise BadRequest("invalid Content-Length") from None
        try:
            body = self.rfile.read(length).decode("utf-8")
            data = json.loads(body) if body else {}
        except UnicodeDecodeError:
            raise BadRequest("body must be UTF-8") from None
        except json.JSONDecodeError as e:
            raise BadRequest(f"invalid JSON: {e}") from None
        if not isinstance(data, dict):
            raise BadRequest("body must be a JSON object")
        return data

    def _text(self, body: dict[str, Any]) -> str:
        text = body.get("text", "")
        if not isinstance(text, str):
            raise BadRequest("'text' must be a string")
        return text

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok", "rules": len(_get_detector().rules)})
        elif self.path == "/rules":
            self._respond(200, {"rules": [r.type_id for r in _get_detector().rules]})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()
            detector = _get_detector()

            if self.path == "/detect":
                result = detector.detect(self._text(body))
                self._respond(200, result.to_dict())

            elif self.path == "/redact-text":
                text = self._text(body)
                result = detector.detect(text)
                self._respond(200, {
                    "text": redact(text, result),
                    "riskScore": result.risk_score,
                    "shouldBlock": result.should_block,
                })

            elif self.path == "/mask":
                type_id, value = body.get("type"), body.get("value")
                if not isinstance(type_id, str) or not isinstance(value, str):
                    raise BadRequest("'type' and 'value' must be strings")
                self._respond(200, {"value": mask(type_id, value)})

            else:
                self._respond(404, {"error": "not found"})

        except BadRequest as e:
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("request to %s failed", self.path)
            self._respond(500, {"error": str(e)})


def serve(port: int = DEFAULT_PORT, config_path: str = DEFAULT_CONFIG) -> None:
    """Start the sensitive-scan HTTP sidecar."""
    global _config_path, _detector
    _config_path = config_path
    _detector = None
    _get_detector()   # fail fast on a bad config

    server = ThreadingHTTPServer(("127.0.0.1", port), ScanHandler)
    logger.info("sensitive-scan sidecar listening on http://127.0.0.1:%d", port)
    logger.info("  config: %s", config_path or "(defaults)")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
        server.shutdown()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="sensitive-scan HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=DEFAULT_CONFIG)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    serve(port=args.port, config_path=args.config)
