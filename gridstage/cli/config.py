import logging
import sys
from typing import IO, Optional


def setup_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None):
    """
    Configure logging for the application.

    Sets third-party loggers (e.g., 'requests', 'urllib3') to WARNING and configures the
    root logger with a custom format. Records go to stderr by default so that the
    plain diagnostic lines written to stdout are never interleaved with log prefixes.

    Parameters:
        level (int): Root logging level.
        stream (IO[str], optional): Destination stream. Defaults to sys.stderr.
    """
    for logger_name in ("requests", "urllib3"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    logging.basicConfig(
        handlers=[stream_handler],
        format=(
            "{asctime:^} | {levelname: ^8} | {filename: ^14} {lineno: <4} | {message}"
        ),
        style="{",
        datefmt="%d.%m.%Y %H:%M:%S",
        level=level,
        force=True,
    )
