"""
Logging for the quilt planner.

Every module logs through the ``quilt_planner`` logger defined here.
The layout engine only emits DEBUG records (plan summaries, unmet hero
minimums); manifest readers warn about unreadable images; the CLI
raises the level with ``--verbose``.
"""

import logging

LOGGER_NAME = "quilt_planner"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
        name: str = LOGGER_NAME,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Return the named logger, attaching a stream handler on first use.

    Later calls only update the level, so importing modules in any
    order never stacks handlers.

    Args:
        name: Logger name; defaults to the package logger.
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        formatter: Formatter for the new handler; ``LOG_FORMAT`` if None.
        handler: Handler to attach; a ``StreamHandler`` if None.

    Returns:
        The configured logger.

    """
    instance = logging.getLogger(name)
    instance.setLevel(level)
    if instance.handlers:
        return instance
    handler = handler or logging.StreamHandler()
    handler.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    instance.addHandler(handler)
    instance.propagate = False
    return instance


def set_verbosity(*, verbose: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


logger = setup_logger()
