"""Logging utilities.

The minimizers report their progress through loggers in the ``descent``
namespace. Nothing is printed below ``WARNING`` unless the level is raised
with :func:`set_log_level`.

"""

import logging
import sys

_DEFAULT_LEVEL = logging.WARNING

_loggers = {}


def get_logger(name=None):
    """Get or create a logger in the ``descent`` namespace.

    Loggers are cached so that each one receives exactly one handler.

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module. If ``None``,
        the package logger is returned.

    Returns
    -------
    :class:`logging.Logger`
        The configured logger.

    """
    if name is None:
        name = "descent"
    if name != "descent" and not name.startswith("descent."):
        name = "descent." + name

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level):
    """Set the level of all ``descent`` loggers.

    Parameters
    ----------
    level : int or str
        A :mod:`logging` level, either as its number or its name
        (e.g., ``"DEBUG"``).

    Raises
    ------
    ValueError
        If ``level`` is not a known level name.

    """
    global _DEFAULT_LEVEL

    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError("Unknown logging level {}.".format(name))

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level
