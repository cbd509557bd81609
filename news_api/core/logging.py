"""Process-wide logging setup."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from news_api.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: "Settings") -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(settings.LOG_LEVEL)
