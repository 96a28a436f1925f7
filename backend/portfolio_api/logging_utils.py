from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import json
import logging
import sys
from typing import Any

from .config import settings

SERVICE_NAME = "portfolio-api"

# Structured extras grouped by what they describe.
_SUBMISSION_FIELDS = {"outcome": "outcome", "ip": "client"}
_DETAIL_FIELDS = ("reason", "path", "status")


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Contact submissions carry a ``submission`` block (``outcome`` and the
    rate-limit ``client`` key) so log queries can filter on them directly;
    request and email context lands under ``detail``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "env": settings.env,
            "logger": record.name,
            "event": getattr(record, "event", None) or "log",
            "msg": record.getMessage(),
        }

        submission = {
            target: _plain(getattr(record, source))
            for source, target in _SUBMISSION_FIELDS.items()
            if getattr(record, source, None) is not None
        }
        if submission:
            payload["submission"] = submission

        detail = {key: _plain(getattr(record, key)) for key in _DETAIL_FIELDS if getattr(record, key, None) is not None}
        if detail:
            payload["detail"] = detail

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging() -> None:
    root = logging.getLogger()
    if any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.setLevel(getattr(logging, settings.log_level, logging.INFO))
    root.addHandler(handler)
