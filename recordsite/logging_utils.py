"""Console logging setup for the recordsite CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(*, verbose: bool = False) -> logging.Logger:
    """Route ``recordsite`` log records to a Rich console handler.

    Parameters
    ----------
    verbose : bool, optional
        Emit DEBUG records when ``True``; INFO and above otherwise.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("recordsite")
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["setup_logging"]
