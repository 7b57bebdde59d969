from __future__ import annotations

import logging

from slotwise.core.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level {level!r}")
    # basicConfig is a no-op when the host (uvicorn, pytest) already installed handlers.
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("slotwise").setLevel(level)
