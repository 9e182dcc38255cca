from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def resolve_level(level: str | None = None) -> int:
    """Level name from the argument or ``LOG_LEVEL``; unknown names fall back to INFO."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    lvl = resolve_level(level)
    logging.basicConfig(level=lvl, format=LOG_FORMAT, stream=sys.stdout)
    # urllib3 logs every Kakao connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(lvl, logging.INFO))
