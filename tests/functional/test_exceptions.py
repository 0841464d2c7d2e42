from chainconf.exceptions import Abort, ConfigError, NetworkNotFoundError
from chainconf.logging import LogLevel, logger


def test_network_not_found_suggests():
    err = NetworkNotFoundError("covrage", options=["development", "coverage"])
    assert str(err) == "No network profile named 'covrage'. Did you mean 'coverage'?"
    assert isinstance(err, ConfigError)
    assert err.network == "covrage"


def test_network_not_found_lists_options():
    err = NetworkNotFoundError("mainnet", options=["development", "coverage"])
    assert str(err) == "No network profile named 'mainnet'. Options: coverage, development."


def test_network_not_found_no_options():
    err = NetworkNotFoundError("mainnet")
    assert str(err) == "No network profile named 'mainnet'."


def test_abort():
    assert str(Abort("stop")) == "stop"


def test_abort_default_message():
    assert str(Abort()) == "Operation aborted."


def test_abort_from_chainconf_exception():
    err = ConfigError("bad config")
    with logger.at_level(LogLevel.INFO):
        abort = Abort.from_chainconf_exception(err)

    assert str(abort) == "(ConfigError) bad config"


def test_abort_from_chainconf_exception_traceback():
    try:
        raise ConfigError("bad config")
    except ConfigError as err:
        abort = Abort.from_chainconf_exception(err, show_traceback=True)

    assert str(abort).startswith("(ConfigError) Traceback")
    assert "ConfigError: bad config" in str(abort)


def test_abort_show(capsys):
    Abort("stop").show()
    assert "stop" in capsys.readouterr().err
