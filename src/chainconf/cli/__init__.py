from chainconf.cli.options import (
    CliContext,
    chainconf_cli_context,
    replace_option,
    verbosity_option,
)

__all__ = [
    "chainconf_cli_context",
    "CliContext",
    "replace_option",
    "verbosity_option",
]
