"""Structured logging and per-extraction analytics logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger (creates handlers only once per name)."""
    from markdown_mcp.utils.config import settings

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    effective_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(effective_level)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    # stdout belongs to the stdio tool protocol
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    # Optional file handler
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt))
        logger.addHandler(fh)

    return logger


def log_extraction(
    url: str,
    route: str,
    chars: int,
    response_time_ms: float,
    error: Optional[str] = None,
) -> None:
    """Append a single extraction record to the JSONL analytics file."""
    from markdown_mcp.utils.config import settings

    if not settings.analytics_file:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "url": url,
        "route": route,
        "chars": chars,
        "response_time_ms": round(response_time_ms, 1),
        "error": error,
    }

    path = Path(settings.analytics_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(record) + "\n")
