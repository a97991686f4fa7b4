import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_path: Optional[str] = None):
    """Replace loguru's default sink with ours.

    Streamlit re-executes the app script on every interaction, so the sinks are
    only installed once per process.
    """
    if getattr(configure_logging, "_applied", False):
        return
    configure_logging._applied = True

    # first remove (default) stderr output
    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)
    if log_path:
        logger.add(log_path, level=level, enqueue=True, colorize=False)
        logger.info("Logging to {}", log_path)
