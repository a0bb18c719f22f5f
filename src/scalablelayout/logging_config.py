"""
Logging Configuration
=====================
One call configures every logger under the 'scalablelayout' namespace.

Why is this file needed?
------------------------
The library modules only create loggers (`logging.getLogger(__name__)`) and
never attach handlers. An application embedding the layout engine either
configures logging itself or calls `setup_logging` once at startup, as the
demo does.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME: str = "scalablelayout"
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Log once per declaration / cell placement; they drown everything else at DEBUG
FORMULA_LOGGERS = ("scalablelayout.solver.parser", "scalablelayout.layout.grid")


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    trace_formulas: bool = False,
) -> logging.Logger:
    """
    Configures the package logger with a console handler and an optional file.

    Args:
        level: Logging level, as a number (logging.DEBUG) or a name ("debug").
        log_file: Optional path to save logs to a file.
        trace_formulas: Also emit the parser and grid DEBUG messages when
            `level` is DEBUG.

    Returns:
        The 'scalablelayout' logger.

    Raises:
        ValueError: If `level` is an unknown level name.
    """
    if isinstance(level, str):
        levels = logging.getLevelNamesMapping()
        if level.upper() not in levels:
            raise ValueError(f"Unknown logging level: {level!r}")
        level = levels[level.upper()]

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Our handlers print everything already; don't repeat through the root logger
    logger.propagate = False

    # Check if handlers already exist to avoid duplicate logs when called twice
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # 3. Formula tracing
    formula_level = level if trace_formulas else max(level, logging.INFO)
    for name in FORMULA_LOGGERS:
        logging.getLogger(name).setLevel(formula_level)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
