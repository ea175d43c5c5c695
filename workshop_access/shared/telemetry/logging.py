"""Process logging setup."""

import logging
import sys

from workshop_access.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | None = None) -> None:
    """Configure root logging to stdout.

    Level defaults to DEBUG when settings.debug is True (decision cache
    HIT/MISS lines are DEBUG), otherwise INFO.
    """
    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stdout)])
    # redis logs connection churn at DEBUG
    logging.getLogger("redis").setLevel(max(level, logging.INFO))
