from typing import Optional

import click

from chainconf.logging import VERBOSITY_FLAGS, LevelType, LogLevel, logger, parse_level
from chainconf.provider import ConfigProvider


class CliContext:
    """
    Passed to every command decorated with
    :meth:`~chainconf.cli.options.chainconf_cli_context`.
    """

    def __init__(self):
        self.logger = logger
        self.provider = ConfigProvider()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.provider!r}>"


def _apply_verbosity(ctx, param, value):
    if value is None:
        return

    try:
        logger.set_level(value)
    except ValueError as err:
        raise click.BadParameter(str(err), ctx=ctx, param=param) from err


def verbosity_option(default: Optional[LevelType] = None):
    """
    Add ``-v, --verbosity``. The level is applied before other options
    are processed; without the flag, ``default`` (if any) is applied.
    """
    if default is not None:
        # Fail at decoration time rather than on first use.
        default = parse_level(default).name

    level_names = ", ".join(level.name for level in LogLevel)
    return click.option(
        *VERBOSITY_FLAGS,
        default=default,
        metavar="LVL",
        expose_value=False,
        is_eager=True,
        callback=_apply_verbosity,
        help=f"One of {level_names}",
    )


def chainconf_cli_context(default_log_level: Optional[LevelType] = None):
    """
    Give the command a :class:`~chainconf.cli.options.CliContext` as its
    first argument, plus the verbosity option.
    """

    def decorator(f):
        f = verbosity_option(default=default_log_level)(f)
        return click.make_pass_decorator(CliContext, ensure=True)(f)

    return decorator


def replace_option():
    return click.option(
        "--replace",
        is_flag=True,
        default=False,
        help="Overwrite the destination if it exists",
    )
