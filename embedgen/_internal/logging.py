# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple logging configuration using Python's standard logging with Rich.

Usage:
    from embedgen._internal.logging import setup_logging

    # In CLI setup
    setup_logging(level="verbose")

    # In application code
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Processing...")
"""

import logging

LEVEL_MAP = {
    'quiet': logging.ERROR,
    'normal': logging.WARNING,
    'verbose': logging.INFO,
    'debug': logging.DEBUG,
    # Standard names are accepted too
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
}


def setup_logging(level: str = "normal") -> int:
    """Configure root logging with a Rich handler on stderr.

    Maps CLI verbosity ('quiet', 'normal', 'verbose', 'debug') to logging
    constants and returns the level applied.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    log_level = LEVEL_MAP.get(level.lower(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=False,
            show_time=False
        )
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(log_level)

    return log_level
