"""Root logger configuration for the API process."""

import logging

from ecomission.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configures a stream logger for the entire application."""
    logger = logging.getLogger()

    # Avoid adding handlers multiple times (reloads, repeated app creation in tests)
    if any(getattr(h, "_ecomission", False) for h in logger.handlers):
        return

    settings = get_settings()
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ecomission = True
    logger.addHandler(handler)
