"""Logging configuration for the vlr-scraper command line.

The command prints its result as JSON on stdout, so every log record goes
to stderr or to the run's log file. The console stays quiet (WARNING and
up, no timestamps) unless ``--verbose`` lowers it; the log file always
captures DEBUG with logger names. Library modules only create loggers and
never configure handlers.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

CONSOLE_FORMAT = "vlr-scraper: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

# Transport libraries log every request at INFO/DEBUG.
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    data_dir: str = "data",
    console_level: int = logging.WARNING,
    quiet_loggers: tuple[str, ...] = QUIET_LOGGERS,
) -> Path:
    """Attach a stderr console handler and a per-run file handler to root.

    Handlers left over from an earlier call are removed and closed, so the
    previous run's log file is released and output is never duplicated.

    Args:
        data_dir: Base data directory. ``logs/`` is created inside it.
        console_level: Minimum level printed on stderr.
        quiet_loggers: Loggers capped at WARNING regardless of the console
            level.

    Returns:
        Path to the newly created log file.
    """
    log_dir = Path(data_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
    log_file = log_dir / f"run-{timestamp}.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
