"""Console logging for the command line front end.

The library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here and nowhere else.
"""

from __future__ import annotations

import logging

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = "WARNING", detailed: bool = False) -> logging.Logger:
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"unknown log level: {level}")
        level = numeric

    root = logging.getLogger("gwe")
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT if detailed else CONSOLE_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    return root
