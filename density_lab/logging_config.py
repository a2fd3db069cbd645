"""
Logging for density_lab.

Every module logs through logging.getLogger(__name__), so one handler set
on the package logger covers the diffusion code, the labs and the CLI.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Point the 'density_lab' logger at stdout, and at log_file if given.

    Calling it again replaces the previous handlers.

    Args:
        level: Threshold for the logger and its handlers
        log_file: Optional path; overwritten on each call

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger("density_lab")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.debug("density_lab logging at level %s", logging.getLevelName(level))
    return package_logger
