import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_dir: str | Path | None = None) -> None:
    log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs") or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)

    log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    max_mb = int(os.getenv("LOG_MAX_MB", "10") or "10")
    backup_count = int(os.getenv("LOG_BACKUP_COUNT", "5") or "5")

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    file_handler = RotatingFileHandler(
        log_dir / "itemshop.log",
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setFormatter(fmt)

    root.addHandler(file_handler)
    root.addHandler(console)

    # Per-update and per-request noise; generation logs keep the configured level.
    for noisy in ("aiogram.event", "uvicorn.access", "aiohttp.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
