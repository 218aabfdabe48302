"""JSON logging for the n8n MCP Server.

The stdio transport owns stdout, so every record is written to stderr.
Tool payloads (credential data, workflow graphs) and secrets are kept out
of log records.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "n8n-mcp"

# Argument names whose values are request payloads, never logged.
PAYLOAD_KEYS = frozenset({"data", "nodes", "connections", "settings", "staticData", "response_body"})

# Substrings that mark a key as holding a secret.
SECRET_MARKERS = ("secret", "password", "token", "apikey", "api_key")


def is_sensitive_key(key: str) -> bool:
    """Return True if a log field named ``key`` must not be emitted.

    Identifiers (``workflow_id``, ``credential_id``, ...) are always kept.
    """
    if key.endswith("_id"):
        return False
    if key in PAYLOAD_KEYS:
        return True
    lowered = key.lower()
    return any(marker in lowered for marker in SECRET_MARKERS)


class MCPJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with service, level and origin."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = SERVICE_NAME
        log_record["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }


def setup_logging(level: str = "INFO") -> None:
    """Send JSON logs to stderr at the given level.

    Unknown level names fall back to INFO.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(MCPJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = [handler]

    # httpx logs every request line at INFO
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ToolInvocationLogger:
    """Logs the start and outcome of one MCP tool call.

    Each record carries ``tool_name``, an ``event`` of ``tool_start``,
    ``tool_success`` or ``tool_failure``, and the call's identifying
    arguments. Outcome records add ``duration_ms``.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._started: Optional[float] = None
        self._tool_name: Optional[str] = None
        self._context: Dict[str, Any] = {}

    def start(self, tool_name: str, **context) -> "ToolInvocationLogger":
        self._started = time.monotonic()
        self._tool_name = tool_name
        self._context = self._safe(context)

        self.logger.info(f"Calling {tool_name}", extra=self._fields("tool_start"))
        return self

    def success(self, **result_info) -> None:
        self.logger.info(
            f"{self._tool_name} succeeded",
            extra=self._fields("tool_success", duration_ms=self.duration_ms, **result_info),
        )

    def failure(self, error: str, **result_info) -> None:
        """Log a failed call.

        Args:
            error: Error text as returned to the caller
            **result_info: Extra fields such as ``error_type``
        """
        self.logger.error(
            f"{self._tool_name} failed",
            extra=self._fields("tool_failure", duration_ms=self.duration_ms, error=error, **result_info),
        )

    @property
    def duration_ms(self) -> int:
        if self._started is None:
            return 0
        return int((time.monotonic() - self._started) * 1000)

    def _fields(self, event: str, **extra) -> Dict[str, Any]:
        return {
            "tool_name": self._tool_name,
            "event": event,
            **self._context,
            **self._safe(extra),
        }

    @staticmethod
    def _safe(values: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in values.items() if not is_sensitive_key(k)}
