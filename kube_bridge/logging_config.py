"""Logging configuration for the kube bridge.

Ownership and farzone decisions are logged at DEBUG, one line per node. They
can be traced on their own, without turning on DEBUG for the rest of the
bridge and the kubernetes client.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that report per-node scheduling decisions
DECISION_LOGGERS = ("kube_bridge.ownership", "kube_bridge.farzone")

# Client libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "kubernetes")


def _is_decision_or_warning(record: logging.LogRecord) -> bool:
    return record.levelno >= logging.WARNING or record.name in DECISION_LOGGERS


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    verbose: bool = False,
    trace_decisions: bool = False,
) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        verbose: If True, set level to DEBUG and echo everything to stderr
        trace_decisions: If True, log ownership and farzone decisions at DEBUG
            whatever the overall level is
    """
    if verbose:
        level = "DEBUG"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    # Diagnostic tables go to stdout, so stderr only carries warnings unless asked
    if verbose:
        stderr_handler = _handler(logging.StreamHandler(sys.stderr), logging.DEBUG)
    elif trace_decisions:
        stderr_handler = _handler(logging.StreamHandler(sys.stderr), logging.DEBUG)
        stderr_handler.addFilter(_is_decision_or_warning)
    else:
        stderr_handler = _handler(logging.StreamHandler(sys.stderr), logging.WARNING)
    root_logger.addHandler(stderr_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            root_logger.addHandler(_handler(logging.FileHandler(log_file), logging.DEBUG))
        except OSError as e:
            logging.warning(f"Failed to create log file handler: {e}")

    for name in DECISION_LOGGERS:
        # NOTSET defers to the root level again after a traced run
        logging.getLogger(name).setLevel(logging.DEBUG if trace_decisions else logging.NOTSET)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
