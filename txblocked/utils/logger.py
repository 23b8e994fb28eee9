# txblocked/utils/logger.py - Logging setup
"""
Logging configuration for the analyzer.

Console records go to stderr by default so that table, CSV and metrics
output on stdout can be piped.
"""

import logging
import sys
from typing import Optional, TextIO, Union
from colorama import Fore, Style


CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

# Set on handlers created by setup_logging so a later call only replaces those
_OWNED = '_txblocked_handler'


class LevelColorFormatter(logging.Formatter):
    """
    Console formatter that colors the level name by severity.
    """

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: Optional[str] = None, colors=None):
        super().__init__(fmt, datefmt=datefmt)
        self.colors = LEVEL_COLORS if colors is None else colors

    def format(self, record):
        color = self.colors.get(record.levelno)
        if color:
            # Other handlers receive the same record
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"

        return super().format(record)


def _stream_is_tty(stream) -> bool:
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def setup_logging(level: Union[str, int] = 'INFO',
                  log_file: Optional[str] = None,
                  use_colors: Optional[bool] = None,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the root logger for a command-line run.

    Calling it again replaces the handlers installed by the previous call
    and leaves any other handler on the root logger alone.

    Args:
        level: Level name ('DEBUG', 'INFO', 'WARNING', 'ERROR') or number;
            unknown names fall back to INFO
        log_file: Optional path of a plain-text log file
        use_colors: Color console level names; None colors only when the
            console stream is a terminal
        stream: Console stream, stderr when omitted

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO
    else:
        numeric_level = level

    console_stream = sys.stderr if stream is None else stream
    if use_colors is None:
        use_colors = _stream_is_tty(console_stream)

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, _OWNED, False)]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(console_stream)
    if use_colors:
        console_handler.setFormatter(LevelColorFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(numeric_level)
        setattr(handler, _OWNED, True)
        root_logger.addHandler(handler)

    root_logger.debug(f"Logging initialized at {logging.getLevelName(numeric_level)} level")
    return root_logger
