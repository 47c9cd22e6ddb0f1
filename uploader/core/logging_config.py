import logging
from typing import Optional

from uploader.core.config import settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None) -> None:
    """Setup basic logging for command line use"""
    level = (level or settings.log_level).upper()
    if settings.debug:
        level = "DEBUG"
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
