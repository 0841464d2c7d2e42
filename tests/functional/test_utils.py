from pathlib import Path

import pytest

from chainconf.utils import clean_path, load_config, to_int


@pytest.mark.parametrize(
    "value,expected",
    ((5, 5), ("5", 5), ("0x05", 5), ("0xfffffffffff", 0xFFFFFFFFFFF), (b"\x01\x00", 256)),
)
def test_to_int(value, expected):
    assert to_int(value) == expected


@pytest.mark.parametrize("value", (None, 1.5, True, "five"))
def test_to_int_invalid(value):
    with pytest.raises(ValueError):
        to_int(value)


def test_load_config_yaml(tmp_path):
    path = tmp_path / "chainconf.yaml"
    path.write_text("rpc:\n  host: localhost\n  port: 8080\n")
    assert load_config(path) == {"rpc": {"host": "localhost", "port": 8080}}


def test_load_config_json(tmp_path):
    path = tmp_path / "chainconf.json"
    path.write_text('{"mocha": {"enableTimeouts": false}}')
    assert load_config(path) == {"mocha": {"enableTimeouts": False}}


def test_load_config_pyproject(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text('[tool.chainconf.compilers.solc]\nversion = "0.6.0"\n')
    assert load_config(path) == {"compilers": {"solc": {"version": "0.6.0"}}}


def test_load_config_pyproject_without_table(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "foo"\n')
    assert load_config(path) == {}


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "chainconf.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_load_config_missing(tmp_path):
    assert load_config(tmp_path / "chainconf.yaml") == {}
    with pytest.raises(OSError):
        load_config(tmp_path / "chainconf.yaml", must_exist=True)


def test_load_config_unknown_suffix(tmp_path):
    path = tmp_path / "chainconf.cfg"
    path.write_text("")
    with pytest.raises(TypeError):
        load_config(path)


def test_clean_path():
    path = Path.home() / "project" / "chainconf.yaml"
    assert clean_path(path) == str(Path("$HOME") / "project" / "chainconf.yaml")


def test_clean_path_outside_home(tmp_path):
    assert clean_path(tmp_path) == str(tmp_path)

