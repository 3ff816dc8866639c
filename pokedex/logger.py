"""Logging setup shared by the application entry point.

Modules only call ``logging.getLogger(__name__)``; ``setup_logging`` is
invoked once by ``create_app``. The level is applied to the ``pokedex``
logger so an embedding process keeps its own root configuration.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PACKAGE_LOGGER = "pokedex"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, level.upper(), logging.INFO))
