import sys
import os
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "{message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{function}:{line} | {message}"


def register_levels() -> None:
    """Custom levels; safe to call more than once."""
    try:
        logger.level("VISUAL")
    except ValueError:
        # Geometry tracing sits below DEBUG
        logger.level("VISUAL", no=8, icon="📐", color="<magenta>")


def configure_logging(
    *,
    level: str = "INFO",
    colorize: bool = True,
    format: str = CONSOLE_FORMAT,
    log_file: str | None = None,
):
    """
    Parameters:
    - level: minimum log level to output (e.g., "DEBUG", "INFO", "VISUAL").
    - colorize: whether to use ANSI colors in the console.
    - format: Loguru format string for console output.
    - log_file: optional path of a second, uncolored sink that keeps full
      tracebacks and rotates at 5 MB.

    APP_LOG_LEVEL / APP_LOG_COLORIZE / APP_LOG_FORMAT / APP_LOG_FILE override
    the arguments.
    """
    env_level = os.getenv("APP_LOG_LEVEL", "").upper()
    env_colorize = os.getenv("APP_LOG_COLORIZE", "").lower()
    env_format = os.getenv("APP_LOG_FORMAT", "")

    effective_level = env_level if env_level else (level or "INFO")
    effective_colorize = env_colorize in ("1", "true", "yes") if env_colorize else colorize
    effective_format = env_format if env_format else format
    effective_file = os.getenv("APP_LOG_FILE") or log_file

    logger.remove()
    register_levels()

    logger.add(
        sys.stdout,
        level=effective_level,
        colorize=effective_colorize,
        format=effective_format,
    )
    if effective_file:
        logger.add(
            effective_file,
            level=effective_level,
            format=FILE_FORMAT,
            rotation="5 MB",
            backtrace=True,
            diagnose=False,
        )
