from copy import deepcopy
from typing import Optional

from chainconf.config import RootConfig
from chainconf.logging import logger

DEVELOPMENT_NETWORK = {
    "host": "127.0.0.1",
    "port": 9545,
    "network_id": "*",
}
COVERAGE_NETWORK = {
    "host": "localhost",
    "network_id": "*",
    # NOTE: If you change this, also change the port in the coverage tool's settings.
    "port": 9545,
    "gas": 0xFFFFFFFFFFF,
    "gasPrice": 0x01,
}
CONFIG_DATA: dict = {
    "networks": {
        "development": DEVELOPMENT_NETWORK,
        "coverage": COVERAGE_NETWORK,
    },
    "rpc": {
        "host": "localhost",
        "port": 8080,
    },
    "mocha": {
        "enableTimeouts": False,
    },
    "compilers": {
        "solc": {
            "version": "0.6.0",
        },
    },
}


class ConfigProvider:
    """
    Supplies the toolchain's configuration. The data is fixed; nothing
    is read from the environment or the filesystem. Every call to
    :meth:`~chainconf.provider.ConfigProvider.load` builds a new,
    frozen :class:`~chainconf.config.RootConfig`.
    """

    def __init__(self, data: Optional[dict] = None):
        self._data = deepcopy(CONFIG_DATA if data is None else data)

    def __repr__(self) -> str:
        networks = ", ".join(self._data.get("networks", {}))
        return f"<ConfigProvider networks={networks}>"

    def load(self) -> RootConfig:
        """
        Load the config.

        Returns:
            :class:`~chainconf.config.RootConfig`
        """
        config = RootConfig.model_validate(deepcopy(self._data))
        logger.debug(f"Loaded config with networks: {', '.join(config.networks)}.")
        return config


_default_provider = ConfigProvider()


def load() -> RootConfig:
    """
    Load the toolchain config from the default provider.
    """
    return _default_provider.load()


__all__ = ["ConfigProvider", "load"]
