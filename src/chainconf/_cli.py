import difflib
import re
from pathlib import Path
from typing import Any

import click
from rich.table import Table

from chainconf.cli import chainconf_cli_context, replace_option
from chainconf.config import RootConfig
from chainconf.exceptions import Abort, ChainconfException
from chainconf.logging import get_rich_console

_DIFFLIB_CUT_OFF = 0.6


class ChainconfCLI(click.Group):
    def invoke(self, ctx) -> Any:
        try:
            return super().invoke(ctx)

        except click.UsageError as err:
            self._suggest_cmd(ctx, err)

        except ChainconfException as err:
            raise Abort.from_chainconf_exception(err) from err

    def _suggest_cmd(self, ctx, usage_error):
        if usage_error.message is None:
            raise usage_error

        elif not (match := re.match("No such command '(.*)'.", usage_error.message)):
            raise usage_error

        bad_arg = match.groups()[0]
        suggested_commands = difflib.get_close_matches(
            bad_arg, self.list_commands(ctx), cutoff=_DIFFLIB_CUT_OFF
        )
        if suggested_commands and bad_arg not in suggested_commands:
            usage_error.message = (
                f"No such command '{bad_arg}'. Did you mean {' or '.join(suggested_commands)}?"
            )

        raise usage_error


@click.group(cls=ChainconfCLI, context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(message="%(version)s", package_name="chainconf")
def cli():
    """
    Smart-contract toolchain configuration.
    """


@cli.command()
@chainconf_cli_context()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default="yaml",
    help="The output format",
)
def show(cli_ctx, output_format):
    """
    Show the configuration
    """
    config = cli_ctx.provider.load()
    click.echo(config.to_json() if output_format.lower() == "json" else config.to_yaml())


@cli.command()
@chainconf_cli_context()
def networks(cli_ctx):
    """
    List the network profiles
    """
    config = cli_ctx.provider.load()
    table = Table("name", "host", "port", "network_id")
    for name, profile in config.networks.items():
        table.add_row(name, profile.host, str(profile.port), profile.network_id)

    get_rich_console().print(table)


@cli.command()
@chainconf_cli_context()
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@replace_option()
def write(cli_ctx, destination: Path, replace):
    """
    Write the configuration to a file
    """
    config = cli_ctx.provider.load()
    config.write_to_disk(destination, replace=replace)
    cli_ctx.logger.success(f"Config written to '{destination}'.")


@cli.command()
@chainconf_cli_context()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def validate(cli_ctx, path: Path):
    """
    Validate a configuration file
    """
    config = RootConfig.validate_file(path)
    cli_ctx.logger.debug(repr(config))
    cli_ctx.logger.success(f"'{path}' is valid.")
