from __future__ import annotations

import logging
from typing import Any, Iterable

# Loggers that echo request URLs and headers at DEBUG.
_CHATTY_LOGGERS = ("urllib3", "httpx", "httpcore")


def configure_logging(level: str, quiet: Iterable[str] = _CHATTY_LOGGERS) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_extra(**kwargs: Any) -> dict[str, Any]:
    """Build an ``extra=`` mapping, dropping unset fields."""
    return {k: v for k, v in kwargs.items() if v is not None}


def mask(value: str | None, visible: int = 0) -> str | None:
    if value is None:
        return None
    if visible <= 0 or len(value) <= visible:
        return "*" * 8
    return value[:visible] + "*" * 8
