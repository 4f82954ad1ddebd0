"""Logging setup shared by the app, the CLI and the providers."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root handlers are installed on first use."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
    return logging.getLogger(name)


def configure_logging(level: str | None = None, log_dir: Path | None = None) -> None:
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(numeric)
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric)
    console.setFormatter(formatter)
    root.addHandler(console)

    # File logging is optional; read-only deployments still get the console.
    target = log_dir or LOG_DIR
    try:
        target.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(
            target / f"jobhub_{datetime.now().strftime('%Y-%m-%d')}.log",
            encoding="utf-8",
        )
    except OSError:
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)
