"""
Process start-up hooks. Nothing here runs at import time;
the host toolchain calls :func:`bootstrap` once before using the config.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Optional, Union

from chainconf.logging import LogLevel, logger
from chainconf.utils import clean_path

DATA_FOLDER_NAME = ".chainconf"
DEFAULT_DATA_FOLDER = Path.home() / DATA_FOLDER_NAME

BootstrapHook = Callable[["BootstrapContext"], None]


class BootstrapContext:
    """
    The values shared with each start-up hook.
    """

    def __init__(
        self,
        data_folder: Optional[Path] = None,
        log_level: Optional[Union[str, int, LogLevel]] = None,
    ):
        self.data_folder = data_folder or DEFAULT_DATA_FOLDER
        self.log_level = log_level

    def __repr__(self) -> str:
        return f"<BootstrapContext data_folder={clean_path(self.data_folder)}>"


def configure_logging(context: BootstrapContext):
    if context.log_level is not None:
        logger.set_level(context.log_level)


def create_data_folder(context: BootstrapContext):
    context.data_folder.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Using data folder '{clean_path(context.data_folder)}'.")


class Bootstrapper:
    """
    Runs the registered hooks at most once. Hooks run in registration order.
    If a hook raises, the error propagates and the next call to
    :meth:`~chainconf.startup.Bootstrapper.run` starts over.
    """

    def __init__(self, hooks: Optional[list[BootstrapHook]] = None):
        self.hooks: list[BootstrapHook] = (
            [configure_logging, create_data_folder] if hooks is None else list(hooks)
        )
        self.context: Optional[BootstrapContext] = None

    @property
    def is_bootstrapped(self) -> bool:
        return self.context is not None

    def register(self, hook: BootstrapHook) -> BootstrapHook:
        """
        Add a start-up hook. Can be used as a decorator.
        """
        if hook not in self.hooks:
            self.hooks.append(hook)

        return hook

    def run(
        self,
        data_folder: Optional[Path] = None,
        log_level: Optional[Union[str, int, LogLevel]] = None,
    ) -> BootstrapContext:
        if self.context is not None:
            return self.context

        context = BootstrapContext(data_folder=data_folder, log_level=log_level)
        for hook in self.hooks:
            hook(context)

        self.context = context
        return context

    def reset(self):
        self.context = None


_bootstrapper = Bootstrapper()


def bootstrap(
    data_folder: Optional[Path] = None,
    log_level: Optional[Union[str, int, LogLevel]] = None,
) -> BootstrapContext:
    """
    Run the process start-up hooks. Calling this more than once
    has no further effect.

    Args:
        data_folder (Optional[Path]): Where chainconf keeps its data.
          Defaults to ``~/.chainconf``.
        log_level (Optional[Union[str, int, LogLevel]]): A log-level to apply.

    Returns:
        :class:`~chainconf.startup.BootstrapContext`
    """
    return _bootstrapper.run(data_folder=data_folder, log_level=log_level)


def register_hook(hook: BootstrapHook) -> BootstrapHook:
    return _bootstrapper.register(hook)


def reset():
    _bootstrapper.reset()


__all__ = [
    "BootstrapContext",
    "Bootstrapper",
    "bootstrap",
    "register_hook",
    "reset",
]
