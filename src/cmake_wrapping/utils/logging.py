import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

package_logger = logging.getLogger("cmake_wrapping")


def setup_logging(log_level: str, logger: logging.Logger) -> None:
    """Configure logging for the cmake-wrap commands.

    Records go to stderr. The toolchain and cmakelists commands print
    generated CMake to stdout, which must stay parseable.

    Raises:
        ValueError: If log_level is not a logging level name
    """
    numeric_level = logging.getLevelName(log_level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    package_logger.setLevel(numeric_level)
    logger.setLevel(numeric_level)
    logger.debug(f"cmake_wrapping logging at level {log_level.upper()}")


def make_logger(name: str) -> logging.Logger:
    """Return the logger for a cmake_wrapping module."""
    return logging.getLogger(name)
