"""File logging; the terminal itself belongs to the TUI."""

from __future__ import annotations

import logging
from pathlib import Path

from kadai.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


def setup_logging(settings: Settings) -> logging.Logger:
    log_file = Path(settings.log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("kadai")
    root.setLevel(settings.log_level.upper())
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return root
