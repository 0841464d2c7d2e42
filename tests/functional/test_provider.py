import pytest
from pydantic import ValidationError

from chainconf import ConfigProvider, NetworkProfile, RootConfig, load
from chainconf.provider import CONFIG_DATA


def test_load(config):
    assert isinstance(config, RootConfig)


def test_load_is_deterministic(provider):
    assert provider.load() == provider.load()


def test_load_returns_new_value_each_call(provider):
    first = provider.load()
    second = provider.load()
    assert first is not second
    assert first.networks is not second.networks


def test_module_load_matches_provider(config):
    assert load() == config


def test_networks(config):
    assert set(config.networks) == {"development", "coverage"}


def test_development_network(config):
    network = config.networks["development"]
    assert network.name == "development"
    assert network.host == "127.0.0.1"
    assert network.port == 9545
    assert network.network_id == "*"
    assert network.gas is None
    assert network.gas_price is None


def test_coverage_network(config):
    network = config.networks["coverage"]
    assert network.name == "coverage"
    assert network.host == "localhost"
    assert network.port == 9545
    assert network.network_id == "*"
    assert network.gas == 0xFFFFFFFFFFF
    assert network.gas_price == 1


def test_rpc(config):
    assert config.rpc.host == "localhost"
    assert config.rpc.port == 8080


def test_mocha(config):
    assert config.mocha.enable_timeouts is False


def test_compilers(config):
    assert config.compilers.solc.version == "0.6.0"


def test_config_is_frozen(config):
    with pytest.raises(ValidationError):
        config.rpc = config.rpc.model_copy(update={"port": 1})

    with pytest.raises(ValidationError):
        config.networks["development"].port = 1


def test_networks_are_read_only(config):
    with pytest.raises(TypeError):
        config.networks["mainnet"] = NetworkProfile(host="example.com", port=8545)

    with pytest.raises(TypeError):
        del config.networks["coverage"]

    assert set(config.networks) == {"development", "coverage"}


def test_config_is_hashable(provider):
    first = provider.load()
    second = provider.load()
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_provider_does_not_read_environment(monkeypatch, config):
    monkeypatch.setenv("PORT", "1234")
    monkeypatch.setenv("HOST", "example.com")
    monkeypatch.setenv("CHAINCONF_RPC_PORT", "1234")
    assert load() == config


def test_custom_data(config_data):
    config_data["rpc"]["port"] = 8545
    provider = ConfigProvider(config_data)
    assert provider.load().rpc.port == 8545


def test_custom_data_is_copied(config_data):
    provider = ConfigProvider(config_data)
    config_data["rpc"]["port"] = 1
    assert provider.load().rpc.port == 8080


def test_default_data_unchanged_by_load(config):
    assert CONFIG_DATA["rpc"] == {"host": "localhost", "port": 8080}
    assert "name" not in CONFIG_DATA["networks"]["development"]


def test_repr(provider):
    assert repr(provider) == "<ConfigProvider networks=development, coverage>"
