"""Structured logging: JSON for production, human-readable for local."""

import logging
import sys

from bitscope.config import Settings


def configure_logging(settings: Settings) -> None:
    if settings.is_production:
        logging.basicConfig(
            level=logging.INFO,
            format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
            stream=sys.stdout,
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
