# punctrestore/LoggingSetup.py
import sys
import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOG_FILENAME = "punctrestore.log"
PACKAGE_LOGGER = "punctrestore"
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'

# Download and HTTP chatter stays at WARNING even in verbose mode
THIRD_PARTY_LOGGERS = ("huggingface_hub", "urllib3", "filelock", "httpx")


def setup_logging(logs_dir: Path, verbose: bool = False, is_frozen: bool = False) -> logging.Logger:
    """
    Configure logging for the restorer CLI and scripts.

    Creates the log directory, attaches a rotating file handler to the root
    logger and, when running from a terminal, a stderr console handler.
    Restored sentences are printed to stdout, so log output never mixes in.

    Args:
        logs_dir: Directory to store log files
        verbose: If True, set DEBUG level (engine decisions included); otherwise INFO
        is_frozen: If True, skip console handler (frozen app has no console)

    Returns:
        The package logger ("punctrestore")
    """
    logs_dir.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        logs_dir / LOG_FILENAME,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    if not is_frozen:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.info(f"Logging initialized: level={logging.getLevelName(level)}, frozen={is_frozen}, "
                        f"file={logs_dir / LOG_FILENAME}")
    return package_logger
