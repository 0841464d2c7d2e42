from copy import deepcopy

import pytest
from click.testing import CliRunner

from chainconf.logging import LogLevel, logger
from chainconf.provider import CONFIG_DATA, ConfigProvider
from chainconf.startup import reset as reset_startup


@pytest.fixture(autouse=True)
def reset_bootstrap():
    reset_startup()
    yield
    reset_startup()


@pytest.fixture(autouse=True)
def reset_log_level():
    level = logger.level
    yield
    logger.set_level(level or LogLevel.INFO)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def provider():
    return ConfigProvider()


@pytest.fixture
def config(provider):
    return provider.load()


@pytest.fixture
def config_data():
    return deepcopy(CONFIG_DATA)
