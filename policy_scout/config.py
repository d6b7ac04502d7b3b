"""Configuration management for policy-scout.

Settings are resolved with the following precedence (highest to lowest):
1. CLI argument
2. Environment variable (POLICY_SCOUT_<KEY>; project_id also accepts
   the legacy BLOCKFROST_PROJECT_ID)
3. Config file (policy-scout.yaml in the working directory, or --config)
4. Built-in default

The quota only matters once a policy is being harvested, so it is
resolved separately from the connection settings; listing collections
never looks at it.

Usage:
    from policy_scout.config import load_settings, resolve_quota

    settings = load_settings(config_file)
    project_id = settings.require_project_id()
    quota = resolve_quota(cli_quota, config_file)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from policy_scout.constants import DEFAULT_CATALOG_URL, DEFAULT_QUOTA, DEFAULT_TIMEOUT
from policy_scout.errors import (
    ConfigInvalidStructureError,
    ConfigParseError,
    InvalidSettingError,
    MissingCredentialsError,
)

CONFIG_FILENAME = "policy-scout.yaml"

ENV_PREFIX = "POLICY_SCOUT_"

# Legacy variable names checked after the prefixed one
LEGACY_ENV_VARS: dict[str, list[str]] = {"project_id": ["BLOCKFROST_PROJECT_ID"]}

DEFAULTS: dict[str, Any] = {
    "project_id": None,
    "api_url": None,
    "catalog_url": DEFAULT_CATALOG_URL,
    "timeout": DEFAULT_TIMEOUT,
    "quota": DEFAULT_QUOTA,
}

KNOWN_SETTINGS: frozenset[str] = frozenset(DEFAULTS)

# Values never printed in full
SECRET_SETTINGS: frozenset[str] = frozenset({"project_id"})


def get_config_path(config_file: Path | None = None) -> Path:
    """Return the config file to read: the given one or ./policy-scout.yaml."""
    if config_file is not None:
        return config_file
    return Path.cwd() / CONFIG_FILENAME


def load_config(config_file: Path | None = None) -> dict[str, Any]:
    """Load settings from the YAML config file.

    Args:
        config_file: Explicit path; defaults to ./policy-scout.yaml.

    Returns:
        Config dictionary. Returns empty dict if the file doesn't exist.

    Raises:
        ConfigParseError: If the file is not valid YAML.
        ConfigInvalidStructureError: If the document is not a mapping.
    """
    path = get_config_path(config_file)

    if not path.exists():
        return {}

    content = path.read_text()
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigParseError(str(path), str(err)) from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigInvalidStructureError(
            str(path), f"expected a mapping, got {type(data).__name__}"
        )
    return data


def env_var_names(key: str) -> list[str]:
    """Environment variables consulted for a setting, in precedence order.

    >>> env_var_names("quota")
    ['POLICY_SCOUT_QUOTA']
    """
    return [f"{ENV_PREFIX}{key.upper()}", *LEGACY_ENV_VARS.get(key, [])]


def _from_env(key: str) -> tuple[str, str] | None:
    for name in env_var_names(key):
        value = os.environ.get(name)
        if value is not None:
            return name, value
    return None


def resolve_setting(
    key: str,
    cli_value: Any | None = None,
    config: dict[str, Any] | None = None,
) -> tuple[Any | None, str]:
    """Resolve one setting and report where its value came from.

    Returns:
        (value, source) where source is "cli", "env", "file" or "default".
    """
    if cli_value is not None:
        return cli_value, "cli"

    env = _from_env(key)
    if env is not None:
        return env[1], "env"

    if config and key in config:
        return config[key], "file"

    return DEFAULTS.get(key), "default"


def get_setting(
    key: str,
    cli_value: Any | None = None,
    config_file: Path | None = None,
) -> Any | None:
    """Resolve a setting with full precedence; None if unset everywhere."""
    value, _ = resolve_setting(key, cli_value, load_config(config_file))
    return value


def mask_secret(value: str) -> str:
    """Hide all but the first and last four characters."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"


def list_settings(config_file: Path | None = None) -> dict[str, dict[str, Any]]:
    """List every known setting with its resolved value and source.

    Secret values are masked. Values are shown as found, without
    type checks, so a bad value can still be inspected.

    Returns:
        Dict mapping setting keys to {"value": ..., "source": ...}
    """
    config = load_config(config_file)
    result: dict[str, dict[str, Any]] = {}
    for key in sorted(KNOWN_SETTINGS):
        value, source = resolve_setting(key, None, config)
        if key in SECRET_SETTINGS and isinstance(value, str):
            value = mask_secret(value)
        result[key] = {"value": value, "source": source}
    return result


def _coerce_positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidSettingError(key, value, "must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as err:
        raise InvalidSettingError(key, value, "must be a positive integer") from err
    if isinstance(value, float) and value != number:
        raise InvalidSettingError(key, value, "must be a positive integer")
    if number < 1:
        raise InvalidSettingError(key, value, "must be a positive integer")
    return number


def _coerce_positive_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidSettingError(key, value, "must be a positive number")
    try:
        number = float(value)
    except (TypeError, ValueError) as err:
        raise InvalidSettingError(key, value, "must be a positive number") from err
    if number <= 0:
        raise InvalidSettingError(key, value, "must be a positive number")
    return number


def _optional_str(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidSettingError(key, value, "must be a string")
    return value or None


@dataclass(frozen=True)
class Settings:
    """Resolved, type-checked settings for one run.

    Attributes:
        project_id: Chain index project id, or None if not configured.
        api_url: Explicit chain index API root, or None to derive it.
        catalog_url: Collection directory endpoint.
        timeout: Per-request timeout in seconds.
    """

    project_id: str | None
    api_url: str | None
    catalog_url: str
    timeout: float

    def require_project_id(self) -> str:
        """Return the project id or raise MissingCredentialsError."""
        if not self.project_id:
            raise MissingCredentialsError("project_id", env_var_names("project_id"))
        return self.project_id


def load_settings(config_file: Path | None = None) -> Settings:
    """Resolve the connection settings into a Settings instance.

    Args:
        config_file: Explicit config file path; defaults to ./policy-scout.yaml.

    Raises:
        ConfigParseError: Unreadable config file.
        ConfigInvalidStructureError: Config document is not a mapping.
        InvalidSettingError: A value has the wrong type or range.
    """
    config = load_config(config_file)

    def pick(key: str) -> Any:
        return resolve_setting(key, None, config)[0]

    catalog_url = _optional_str("catalog_url", pick("catalog_url")) or DEFAULT_CATALOG_URL
    return Settings(
        project_id=_optional_str("project_id", pick("project_id")),
        api_url=_optional_str("api_url", pick("api_url")),
        catalog_url=catalog_url,
        timeout=_coerce_positive_float("timeout", pick("timeout")),
    )


def resolve_quota(cli_value: int | None = None, config_file: Path | None = None) -> int:
    """Resolve the source quota with full precedence and check it is positive.

    Raises:
        InvalidSettingError: If the resolved value is not a positive integer.
    """
    return _coerce_positive_int("quota", get_setting("quota", cli_value, config_file))
