"""
Logging Configuration
=====================
curvedgeometry is a library, so importing it never configures logging: the
package logger only carries a `NullHandler` (see `curvedgeometry/__init__.py`).
Embedding applications that want to see the factory and overlay diagnostics
call `setup_logging()` once.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "curvedgeometry"

# Handlers installed by setup_logging carry this name so a later call can
# replace them without touching handlers the application attached itself.
_HANDLER_NAME = "curvedgeometry.setup"


def setup_logging(
    level: int = logging.DEBUG,
    log_file: Optional[str] = None,
    *,
    console: bool = True
) -> logging.Logger:
    """
    Route curvedgeometry diagnostics to stderr and/or a log file.

    Args:
        level: Threshold for the package logger.
        log_file: Optional path; records are appended, never truncated.
        console: Whether to log to stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to {', '.join(type(h).__name__ for h in handlers) or 'no handlers'}.")
    return logger
