# backend/pickmypdf/core/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pickmypdf.core.config_loader import settings


# -------------------------------------------------------------------
# WHERE LOGS GO
# -------------------------------------------------------------------
# backend/logs unless LOG_DIR points somewhere else
LOG_DIR = Path(settings.log_dir) if settings.log_dir else Path(__file__).resolve().parents[2] / "logs"
LOG_FILE = LOG_DIR / "pickmypdf.log"

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)


def _build_handlers(level: int):
    formatter = logging.Formatter(LOG_FORMAT)
    handlers = []

    if settings.log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            LOG_FILE,
            maxBytes=5 * 1024 * 1024,   # 5 MB per file, 5 backups
            backupCount=5,
            encoding="utf-8"
        )
        rotating.setLevel(max(level, logging.INFO))
        handlers.append(rotating)

    console = logging.StreamHandler()
    console.setLevel(level)
    handlers.append(console)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


# -------------------------------------------------------------------
# SHARED "pickmypdf" LOGGER
# -------------------------------------------------------------------
logger = logging.getLogger("pickmypdf")
logger.setLevel(logging.DEBUG)

# uvicorn --reload imports this module more than once
if not logger.handlers:
    for h in _build_handlers(getattr(logging, settings.log_level.upper(), logging.DEBUG)):
        logger.addHandler(h)
