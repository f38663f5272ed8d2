from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_LEVEL_ENV_VAR = "HEART_DASHBOARD_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    effective = level or os.getenv(LOG_LEVEL_ENV_VAR) or "INFO"
    logging.basicConfig(level=effective.upper(), format=LOG_FORMAT)
