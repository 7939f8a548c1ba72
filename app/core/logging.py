"""
Logging setup - one call at app creation, module loggers everywhere else.
"""

import logging

from app.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings. Debug mode forces DEBUG level."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL echo is controlled by the engine; keep the sqlalchemy logger quieter
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
