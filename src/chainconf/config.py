import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Optional

import yaml
from packaging.version import InvalidVersion, Version
from pydantic import (
    BaseModel,
    ConfigDict,
    BeforeValidator,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from chainconf.exceptions import ConfigError, NetworkNotFoundError
from chainconf.logging import logger
from chainconf.utils import CONFIG_FILE_SUFFIXES, clean_path, load_config, to_int

WILDCARD_NETWORK_ID = "*"
MAX_PORT = 65535


def _reject_bool(value):
    # bool is an int subclass; `port: true` is a typo, not port 1.
    if isinstance(value, bool):
        raise ValueError("Port must be an integer, not a boolean.")

    return value


Port = Annotated[int, BeforeValidator(_reject_bool), Field(ge=0, le=MAX_PORT)]


class ConfigModel(BaseModel):
    """
    Base class for all configuration models. Models are frozen;
    once validated, a config value is never mutated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class NetworkProfile(ConfigModel):
    """
    A named endpoint the deployment tool connects to.
    """

    name: str = Field(default="", exclude=True)
    """
    The key of the profile under ``networks:``. Not serialized into the
    profile body.
    """

    host: str
    """
    The host of the node.
    """

    port: Port
    """
    The TCP port of the node.
    """

    network_id: str = WILDCARD_NETWORK_ID
    """
    The chain identifier, or ``"*"`` to match any network.
    """

    gas: Optional[int] = Field(default=None, ge=0)
    """
    Gas limit passed through verbatim to the deployment tool.
    Accepts ints, numeric strings and ``0x``-prefixed hex strings.
    """

    gas_price: Optional[int] = Field(default=None, ge=0, alias="gasPrice")
    """
    Gas price passed through verbatim to the deployment tool.
    """

    @field_validator("network_id", mode="before")
    @classmethod
    def validate_network_id(cls, value):
        # Numeric chain IDs are common in hand-written files.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)

        return value

    @field_validator("gas", "gas_price", mode="before")
    @classmethod
    def validate_gas_value(cls, value):
        if value is None or isinstance(value, int):
            return value

        elif isinstance(value, (str, bytes)):
            try:
                return to_int(value)
            except ValueError as err:
                raise ValueError(f"Invalid gas value '{value!r}'.") from err

        return value

    @property
    def is_wildcard(self) -> bool:
        return self.network_id == WILDCARD_NETWORK_ID

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class RpcEndpoint(ConfigModel):
    """
    The RPC endpoint the toolchain serves or connects to.
    """

    host: str
    port: Port

    @model_validator(mode="before")
    @classmethod
    def validate_legacy_port_key(cls, model):
        if not isinstance(model, dict) or "post" not in model or "port" in model:
            return model

        # Older config files spelled this key "post".
        logger.warning("Config key 'rpc.post' is deprecated; reading it as 'rpc.port'.")
        fixed_model = {k: v for k, v in model.items() if k != "post"}
        fixed_model["port"] = model["post"]
        return fixed_model


class MochaOptions(ConfigModel):
    """
    Options forwarded to the external test runner.
    """

    enable_timeouts: bool = Field(alias="enableTimeouts")


class SolcConfig(ConfigModel):
    version: str
    """
    The version of the Solidity compiler, e.g. ``"0.6.0"``.
    """

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value):
        if isinstance(value, Version):
            return str(value)

        elif isinstance(value, str):
            try:
                Version(value.strip())
            except InvalidVersion as err:
                raise ValueError(f"Invalid compiler version '{value}'.") from err

            return value.strip()

        return value

    @property
    def parsed_version(self) -> Version:
        return Version(self.version)


class CompilerSpec(ConfigModel):
    solc: SolcConfig


class RootConfig(ConfigModel):
    """
    The top-level config. All sections are required and no
    cross-field validation is performed.
    """

    networks: Mapping[str, NetworkProfile]
    """
    Network profiles by name. Read-only.
    """

    rpc: RpcEndpoint
    mocha: MochaOptions
    compilers: CompilerSpec

    @model_validator(mode="before")
    @classmethod
    def validate_model(cls, model):
        if not isinstance(model, dict) or not isinstance(model.get("networks"), Mapping):
            return model

        fixed_networks: dict = {}
        for name, profile in model["networks"].items():
            name = str(name)
            if isinstance(profile, Mapping):
                fixed_networks[name] = {**profile, "name": name}
            elif isinstance(profile, NetworkProfile) and profile.name != name:
                fixed_networks[name] = profile.model_copy(update={"name": name})
            else:
                fixed_networks[name] = profile

        return {**model, "networks": fixed_networks}

    @field_validator("networks", mode="after")
    @classmethod
    def freeze_networks(cls, value):
        return MappingProxyType(dict(value))

    @field_serializer("networks", mode="wrap")
    def serialize_networks(self, value, handler):
        return handler(dict(value))

    def __hash__(self) -> int:
        return hash((frozenset(self.networks.items()), self.rpc, self.mocha, self.compilers))

    def __repr__(self) -> str:
        return f"<RootConfig networks={', '.join(self.networks)}>"

    def __str__(self) -> str:
        return self.to_yaml()

    def get_network(self, name: str) -> NetworkProfile:
        """
        Get a network profile by name.

        Raises:
            :class:`~chainconf.exceptions.NetworkNotFoundError`: When the
              profile is not configured.

        Args:
            name (str): The name of the profile, e.g. ``"development"``.

        Returns:
            :class:`~chainconf.config.NetworkProfile`
        """
        if name in self.networks:
            return self.networks[name]

        raise NetworkNotFoundError(name, options=self.networks)

    def to_dict(self) -> dict:
        """
        The config as plain data, using the on-disk key names
        and omitting unset optional values.
        """
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_yaml(cls, content: str) -> "RootConfig":
        try:
            data = yaml.safe_load(content) or {}
            return cls.model_validate(data)
        except (ValidationError, yaml.YAMLError) as err:
            raise ConfigError(str(err)) from err

    @classmethod
    def validate_file(cls, path: Path) -> "RootConfig":
        """
        Create a RootConfig using the given path.
        Supports both ``pyproject.toml`` and ``.yml``, ``.yaml``, ``.json`` files.

        Raises:
            :class:`~chainconf.exceptions.ConfigError`: When given an unknown file type,
              a missing file, or the data is invalid.

        Args:
            path (Path): The path to the file.

        Returns:
            :class:`~chainconf.config.RootConfig`
        """
        if path.is_dir():
            raise ConfigError(f"'{clean_path(path)}' is a directory, not a config file.")

        try:
            data = load_config(path, must_exist=True)
        except TypeError as err:
            raise ConfigError(f"Unsupported config file type '{path.suffix}'.") from err
        except OSError as err:
            raise ConfigError(f"Config file '{clean_path(path)}' not found.") from err
        except (ValueError, yaml.YAMLError) as err:
            # Covers JSON and TOML decode errors.
            raise ConfigError(f"'{clean_path(path)}' is not parseable: {err}") from err

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            if path.suffix in (".yml", ".yaml") and (
                final_msg := _describe_yaml_errors(err, path)
            ):
                raise ConfigError(final_msg) from err

            raise ConfigError(str(err)) from err

    def write_to_disk(self, destination: Path, replace: bool = False):
        """
        Write this config to a file.

        Args:
            destination (Path): The path to write to.
            replace (bool): Set to ``True`` to overwrite the file if it exists.
        """
        if destination.suffix not in CONFIG_FILE_SUFFIXES:
            raise ConfigError(f"Unsupported destination file type '{destination}'.")
        elif destination.is_dir():
            raise ConfigError(f"Destination '{clean_path(destination)}' is a directory.")
        elif destination.exists() and not replace:
            raise ConfigError(f"Destination '{clean_path(destination)}' exists.")

        content = self.to_json() if destination.suffix == ".json" else self.to_yaml()
        destination.parent.mkdir(parents=True, exist_ok=True)

        # A failed write leaves any existing destination untouched.
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf8") as file:
                file.write(content)

            os.replace(tmp_name, destination)
        finally:
            Path(tmp_name).unlink(missing_ok=True)

        logger.debug(f"Wrote config to '{clean_path(destination)}'.")


def _find_line(lines: list[str], loc: tuple) -> Optional[int]:
    # Walk the error location key by key down the file. If the full path
    # is not present (e.g. a missing key), the deepest match is returned.
    keys = iter(loc)
    key = next(keys, None)
    found = None
    for index, line in enumerate(lines):
        if key is None:
            break

        elif line.lstrip().startswith(f"{key}:"):
            found = index
            key = next(keys, None)

    return found


def _describe_yaml_errors(err: ValidationError, path: Path) -> Optional[str]:
    lines = path.read_text(encoding="utf8").splitlines()
    problems: dict[int, str] = {}
    for error in err.errors():
        index = _find_line(lines, error.get("loc", ()))
        if index is None or index in problems:
            continue

        preview = [
            f"{'-->' if no == index else '   '}{no + 1}: {lines[no]}"
            for no in range(max(index - 1, 0), min(index + 2, len(lines)))
        ]
        problems[index] = "\n".join([error["msg"], *preview])

    if not problems:
        return None

    details = "\n\n".join(problems[index] for index in sorted(problems))
    return f"'{clean_path(path)}' is invalid!\n{details}"


__all__ = [
    "CompilerSpec",
    "MochaOptions",
    "NetworkProfile",
    "RootConfig",
    "RpcEndpoint",
    "SolcConfig",
]
