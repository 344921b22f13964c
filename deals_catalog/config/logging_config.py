# deals_catalog/config/logging_config.py

"""Per-run logging for deals_catalog.

Each launch writes ``logs/run_<timestamp>.log``.  Every line carries the
CLI command that started the run (``[category]``, ``[health]`` ...), so
logs from several invocations can be grepped apart after the fact.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from deals_catalog.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | [%(command)s] %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | [%(command)s] %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _CommandTag(logging.Filter):
    """Stamps each record with the command being run."""

    def __init__(self, command: str) -> None:
        super().__init__()
        self.command = command

    def filter(self, record: logging.LogRecord) -> bool:
        record.command = self.command
        return True


def setup_logging(command: str = "-") -> Path:
    """Attach the per-run file and stderr handlers to ``deals_catalog``.

    A second call keeps the existing handlers and only re-tags them
    with *command*.  Returns the path of this run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("deals_catalog")
    root_logger.setLevel(logging.DEBUG)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    if root_logger.handlers:
        for handler in root_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                log_file = Path(handler.baseFilename)
            for existing in handler.filters:
                if isinstance(existing, _CommandTag):
                    existing.command = command
        return log_file

    tag = _CommandTag(command)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(tag)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.addFilter(tag)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
