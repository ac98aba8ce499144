"""
Logging configuration for applications embedding the compat layer.
"""

import logging
from typing import Optional

from schema_compat.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT
    )

    # Pydantic's internals are noisy at DEBUG
    logging.getLogger("pydantic").setLevel(logging.WARNING)
    logging.getLogger("schema_compat").setLevel(getattr(logging, settings.log_level.upper()))
