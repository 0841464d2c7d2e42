import difflib
import traceback
from collections.abc import Iterable
from typing import Optional

import click

from chainconf.logging import LogLevel, logger


class ChainconfException(Exception):
    """
    An exception raised by chainconf.
    """


class ConfigError(ChainconfException):
    """
    Raised when a problem occurs from the configuration file.
    """


class NetworkNotFoundError(ConfigError):
    """
    Raised when looking up a network profile that is not configured.
    """

    def __init__(self, network: str, options: Optional[Iterable[str]] = None):
        self.network = network
        options = sorted(options or [])
        message = f"No network profile named '{network}'."
        if close_matches := difflib.get_close_matches(network, options, cutoff=0.6):
            similar = "', '".join(close_matches)
            message = f"{message} Did you mean '{similar}'?"
        elif options:
            message = f"{message} Options: {', '.join(options)}."

        super().__init__(message)


class Abort(click.ClickException):
    """
    A user-facing CLI error. Printed through the chainconf logger
    instead of click's plain "Error:" line.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Operation aborted.")

    @classmethod
    def from_chainconf_exception(
        cls, exc: ChainconfException, show_traceback: Optional[bool] = None
    ) -> "Abort":
        if show_traceback is None:
            show_traceback = logger.level <= LogLevel.DEBUG

        # Only meaningful while handling `exc`.
        detail = traceback.format_exc() if show_traceback else str(exc)
        return cls(f"({type(exc).__name__}) {detail}")

    def show(self, file=None):
        logger.error(self.format_message())


__all__ = [
    "Abort",
    "ChainconfException",
    "ConfigError",
    "NetworkNotFoundError",
]
