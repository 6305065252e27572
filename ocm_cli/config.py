"""
Configuration file of the OCM CLI.

The configuration is a JSON document stored in the file given by the `OCM_CONFIG` environment
variable, or else in `~/.ocm.json`, or else in `ocm/ocm.json` inside the user configuration
directory.
"""

import dataclasses
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

import yaml

from ocm_cli.errors import ConfigError

# Settings that can be changed with `ocm config set`:
SETTABLE = (
    "access_token",
    "client_id",
    "client_secret",
    "insecure",
    "password",
    "refresh_token",
    "token_url",
    "url",
    "pager",
)


@dataclass
class Config:
    """Settings loaded from the configuration file."""

    access_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    insecure: bool = False
    password: str = ""
    refresh_token: str = ""
    scopes: List[str] = field(default_factory=list)
    token_url: str = ""
    url: str = ""
    user: str = ""
    pager: str = ""


def location() -> Path:
    """Return the path of the configuration file."""
    env = os.environ.get("OCM_CONFIG")
    if env:
        return Path(env)

    path = Path.home() / ".ocm.json"
    if path.exists():
        return path

    config_dir = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_dir) / "ocm" / "ocm.json"


def load() -> Config:
    """Load the configuration file, returning an empty configuration if it doesn't exist."""
    path = location()
    if not path.exists():
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"can't read config file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"can't parse config file '{path}': {e}") from e

    if not data:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"can't parse config file '{path}': expected an object")

    known = {f.name for f in dataclasses.fields(Config)}
    return Config(**{k: v for k, v in data.items() if k in known})


def save(cfg: Config) -> Path:
    """Save the configuration file, omitting empty settings."""
    path = location()
    data = {k: v for k, v in dataclasses.asdict(cfg).items() if v}

    try:
        path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        path.chmod(0o600)
    except OSError as e:
        raise ConfigError(f"can't write config file '{path}': {e}") from e

    return path


def parse_bool(value: str) -> bool:
    """Parse a boolean setting such as `true`, `False`, `t` or `0`."""
    if value in ("1", "t", "T", "true", "TRUE", "True"):
        return True
    if value in ("0", "f", "F", "false", "FALSE", "False"):
        return False
    raise ConfigError(f"failed to set insecure: {value}")


def get_setting(cfg: Config, name: str) -> Any:
    """Return the value of a setting."""
    if name not in {f.name for f in dataclasses.fields(Config)}:
        raise ConfigError(f"unknown setting '{name}'")
    return getattr(cfg, name)


def set_setting(cfg: Config, name: str, value: str) -> None:
    """Change the value of a setting."""
    if name == "scopes":
        raise ConfigError("setting scopes is unsupported")
    if name not in SETTABLE:
        raise ConfigError(f"unknown setting '{name}'")
    if name == "insecure":
        cfg.insecure = parse_bool(value)
    else:
        setattr(cfg, name, value)
