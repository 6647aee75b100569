"""Logging setup: plain text by default, single-line JSON when structured."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Per-request logs from these libraries drown out scrape summaries.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


class JSONFormatter(logging.Formatter):
    """Render each record as one compact JSON line.

    Records logged from a named asyncio task (the background scraper runs as
    ``background-scraper``) carry a ``task`` field. Structured context passed as
    ``extra={"extra_data": {...}}`` lands under ``data``.
    """

    def to_dict(self, record: logging.LogRecord) -> dict[str, Any]:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        task_name = getattr(record, "taskName", None)
        if task_name:
            entry["task"] = task_name
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        if getattr(record, "extra_data", None) is not None:
            entry["data"] = record.extra_data  # type: ignore[attr-defined]
        return entry

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.to_dict(record), default=str, separators=(",", ":"))


def setup_logging(
    *,
    structured: bool = False,
    log_file: Path | None = None,
    level: int = logging.INFO,
) -> None:
    """Configure the root logger.

    Args:
        structured: Emit JSON lines instead of plain text.
        log_file: If provided, also write logs to this file.
        level: Logging level (default INFO).
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter: logging.Formatter = JSONFormatter() if structured else logging.Formatter(PLAIN_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file))
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
