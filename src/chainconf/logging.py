"""
Terminal logging for chainconf. Records are written with ``click.echo`` so
CLI runners capture them; warnings and errors go to stderr.
"""

import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from enum import IntEnum
from functools import lru_cache
from typing import IO, Optional, Union

import click
from rich.console import Console as RichConsole


class LogLevel(IntEnum):
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    SUCCESS = logging.INFO + 1
    INFO = logging.INFO
    DEBUG = logging.DEBUG


logging.addLevelName(LogLevel.SUCCESS.value, LogLevel.SUCCESS.name)

DEFAULT_LOG_LEVEL = LogLevel.INFO
DEFAULT_LOG_FORMAT = "%(padded_level)s %(message)s"
VERBOSITY_FLAGS = ("-v", "--verbosity")

LevelType = Union[str, int, LogLevel]

_LEVEL_COLORS = {
    LogLevel.ERROR: "bright_red",
    LogLevel.WARNING: "bright_yellow",
    LogLevel.SUCCESS: "bright_green",
    LogLevel.INFO: "blue",
    LogLevel.DEBUG: "blue",
}


def parse_level(value: LevelType) -> LogLevel:
    """
    Resolve a level name (``"debug"``, ``"LogLevel.DEBUG"``) or number to a
    :class:`LogLevel`. Raises ``ValueError`` for anything else.
    """
    if isinstance(value, LogLevel):
        return value

    elif isinstance(value, str):
        name = value.strip().upper().rsplit(".", 1)[-1]
        if name.isnumeric():
            return LogLevel(int(name))

        elif name in LogLevel.__members__:
            return LogLevel[name]

        raise ValueError(f"Unknown log-level '{value}'.")

    return LogLevel(value)


def level_from_argv(argv: Sequence[str]) -> Optional[LogLevel]:
    # Click parses options after import, so read the flag early.
    for flag, value in zip(argv[1:], argv[2:]):
        if flag not in VERBOSITY_FLAGS:
            continue

        try:
            return parse_level(value)
        except ValueError:
            continue

    return None


def _is_terminal() -> bool:
    try:
        return sys.stdout.isatty() and sys.stderr.isatty()
    except (AttributeError, ValueError):
        # Closed or replaced streams.
        return False


class TerminalFormatter(logging.Formatter):
    def format(self, record):
        label = f"{record.levelname}:".ljust(8)
        if _is_terminal():
            label = click.style(label, fg=_LEVEL_COLORS.get(record.levelno))

        record.padded_level = label
        return super().format(record)


class ClickHandler(logging.Handler):
    def emit(self, record):
        try:
            click.echo(self.format(record), err=record.levelno >= logging.WARNING)
        except Exception:
            self.handleError(record)


class ChainconfLogger:
    """
    The ``chainconf`` logger plus the SUCCESS level and level switching.
    """

    def __init__(self, name: str = "chainconf", fmt: Optional[str] = None):
        self._logger = logging.getLogger(name)
        self.format(fmt)
        self.set_level(level_from_argv(sys.argv) or DEFAULT_LOG_LEVEL)

    def format(self, fmt: Optional[str] = None):
        """
        Replace the output format. Passing nothing restores the default.
        """
        for handler in [h for h in self._logger.handlers if isinstance(h, ClickHandler)]:
            self._logger.removeHandler(handler)

        handler = ClickHandler()
        handler.setFormatter(TerminalFormatter(fmt or DEFAULT_LOG_FORMAT))
        self._logger.addHandler(handler)

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: LevelType):
        self._logger.setLevel(parse_level(level))

    @contextmanager
    def at_level(self, level: LevelType) -> Iterator:
        initial_level = self.level
        self.set_level(level)
        try:
            yield
        finally:
            self._logger.setLevel(initial_level)

    def debug(self, msg: str, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def success(self, msg: str, *args, **kwargs):
        self._logger.log(LogLevel.SUCCESS, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)


logger = ChainconfLogger()


@lru_cache(maxsize=None)
def get_rich_console(file: Optional[IO[str]] = None) -> RichConsole:
    """
    A shared ``rich`` console. With no ``file`` it writes to whatever
    ``sys.stdout`` is at print time.
    """
    return RichConsole(file=file, width=100)


__all__ = [
    "ChainconfLogger",
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "get_rich_console",
    "logger",
    "parse_level",
]
