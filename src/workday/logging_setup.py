from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(*, level: str | int = logging.INFO, log_dir: Optional[str | Path] = None) -> None:
    """Configure root logging once: console always, a file when ``log_dir`` is set."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "workday.log"), encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # mysql-connector is chatty at DEBUG.
    logging.getLogger("mysql.connector").setLevel(max(level, logging.WARNING))
