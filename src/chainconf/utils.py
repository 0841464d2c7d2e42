import json
import sys
from pathlib import Path
from typing import Any

import yaml
from eth_utils import is_0x_prefixed

if sys.version_info >= (3, 11):
    import tomllib
else:
    import toml as tomllib

CONFIG_FILE_SUFFIXES = (".yml", ".yaml", ".json")

_PARSERS = {
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}


def load_config(path: Path, must_exist: bool = False) -> dict:
    """
    Read a config file into a dict. ``pyproject.toml`` contributes its
    ``[tool.chainconf]`` table; other files must be JSON or YAML.

    Raises:
        TypeError: For any other file type.
        OSError: When ``must_exist`` is set and there is no such file.
    """
    if not path.is_file():
        if must_exist:
            raise OSError(f"{path} does not exist!")

        return {}

    text = path.read_text(encoding="utf8")
    if path.name == "pyproject.toml":
        return tomllib.loads(text).get("tool", {}).get("chainconf") or {}

    elif (parse := _PARSERS.get(path.suffix)) is None:
        raise TypeError(f"Cannot parse '{path.suffix}' files!")

    return parse(text) or {}


def to_int(value: Any) -> int:
    """
    Coerce an int, a decimal or ``0x`` hex string, or big-endian bytes.
    """
    if isinstance(value, bool):
        # bool is an int subclass.
        raise ValueError(f"cannot convert {value!r} to int")

    elif isinstance(value, int):
        return value

    elif isinstance(value, bytes):
        return int.from_bytes(value, "big")

    elif isinstance(value, str):
        return int(value, 16) if is_0x_prefixed(value) else int(value, 10)

    raise ValueError(f"cannot convert {value!r} to int")


def clean_path(path: Path) -> str:
    """
    Render a path for output with the home directory shown as ``$HOME``.
    """
    try:
        return str(Path("$HOME") / path.relative_to(Path.home()))
    except ValueError:
        return str(path)


__all__ = [
    "CONFIG_FILE_SUFFIXES",
    "clean_path",
    "load_config",
    "to_int",
]
