from importlib.metadata import PackageNotFoundError, version

from chainconf.config import (
    CompilerSpec,
    MochaOptions,
    NetworkProfile,
    RootConfig,
    RpcEndpoint,
    SolcConfig,
)
from chainconf.provider import ConfigProvider, load
from chainconf.startup import bootstrap

try:
    __version__ = version("chainconf")
except PackageNotFoundError:
    # Running from a source checkout.
    __version__ = ""

__all__ = [
    "__version__",
    "bootstrap",
    "CompilerSpec",
    "ConfigProvider",
    "load",
    "MochaOptions",
    "NetworkProfile",
    "RootConfig",
    "RpcEndpoint",
    "SolcConfig",
]
