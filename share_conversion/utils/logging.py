"""Logging utilities.

This module provides a unified logging interface for the protocol parties,
orchestrators and scripts.

Notes
-----
Loggers never receive secret values (masks, key shares, EC points). Only
phase names, batch sizes and public opened values may be logged.
"""

import logging

_LOGGERS: dict = {}
_LEVEL: int = logging.NOTSET


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for the given module.

    Parameters
    ----------
    name : str
        Module name (typically __name__).

    Returns
    -------
    logging.Logger
        Configured logger instance.

    Notes
    -----
    - Loggers live under the ``share_conversion`` namespace
    - Always use this function instead of direct logging.getLogger()

    Examples
    --------
    >>> logger = get_logger(__name__)
    >>> logger.info("Starting E2F")
    INFO:share_conversion.e2f:Starting E2F
    """
    if name not in _LOGGERS:
        full_name = name if name.startswith("share_conversion") else f"share_conversion.{name}"
        logger = logging.getLogger(full_name)
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(levelname)s:%(name)s:%(message)s"
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.propagate = False
        logger.setLevel(_LEVEL)
        _LOGGERS[name] = logger
    return _LOGGERS[name]


def set_log_level(level: str) -> None:
    """Set the logging level for all share_conversion loggers.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    global _LEVEL

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    _LEVEL = numeric_level

    for logger in _LOGGERS.values():
        logger.setLevel(numeric_level)


def get_protocol_logger(protocol_name: str) -> logging.Logger:
    """Get a logger specifically for protocol parties.

    Parameters
    ----------
    protocol_name : str
        Name of the party (e.g., "e2f.prover", "ghash.verifier").

    Returns
    -------
    logging.Logger
        Logger configured for protocol-level messages.

    Examples
    --------
    >>> logger = get_protocol_logger("e2f.prover")
    >>> logger.debug("preprocess1 done")
    """
    return get_logger(f"protocol.{protocol_name}")
