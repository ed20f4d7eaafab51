"""Configuration loading: TOML files, env var overrides, merge logic.

Discovery order (later overrides earlier):
    1. Built-in defaults (Pydantic model defaults)
    2. User config: ``~/.config/hedera-tools/config.toml``
    3. Project-local config: ``./hedera-tools.toml``
    4. ``$HEDERA_TOOLS_CONFIG`` environment variable (explicit path)
    5. Explicit ``path`` argument
    6. Programmatic overrides (passed to ``load_config``)

After merging, ``$HEDERA_NETWORK`` (when set) selects the network, and
the operator's ``account_id_env`` / ``private_key_env`` fields name env
vars that fill in credentials not already present in the files.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from hedera_tools.core.errors import ConfigError

from .schema import HederaToolsConfig

logger = logging.getLogger(__name__)

NETWORK_ENV = "HEDERA_NETWORK"
NETWORKS = ("testnet", "mainnet")


def _user_config_path() -> Path:
    """Return XDG-compliant user config path."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "hedera-tools" / "config.toml"


def _project_config_path() -> Path:
    """Return project-local config path."""
    return Path.cwd() / "hedera-tools.toml"


def _discover_config_files() -> list[Path]:
    """Return config files in merge order (first = lowest priority)."""
    paths: list[Path] = []

    user = _user_config_path()
    if user.is_file():
        paths.append(user)

    project = _project_config_path()
    if project.is_file():
        paths.append(project)

    env_path = os.environ.get("HEDERA_TOOLS_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.is_file():
            msg = f"HEDERA_TOOLS_CONFIG points to non-existent file: {env_path}"
            raise ConfigError(msg)
        paths.append(p)

    return paths


def _read_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file."""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_network_env(merged: dict[str, Any]) -> dict[str, Any]:
    """Let ``$HEDERA_NETWORK`` pick the network.

    Anything other than a known network name falls back to testnet.
    """
    network = os.environ.get(NETWORK_ENV)
    if not network:
        return merged
    name = network.strip().lower()
    if name not in NETWORKS:
        logger.warning("Unknown %s=%r; using testnet", NETWORK_ENV, network)
        name = "testnet"
    return _deep_merge(merged, {"network": {"name": name}})


def _resolve_operator(config: HederaToolsConfig) -> None:
    """Resolve operator credentials from environment variables (in-place)."""
    operator = config.operator
    if operator.account_id is None and operator.account_id_env:
        operator.account_id = os.environ.get(operator.account_id_env)
    if operator.private_key is None and operator.private_key_env:
        operator.private_key = os.environ.get(operator.private_key_env)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> HederaToolsConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file path (highest file priority).
        overrides: Dict of overrides merged last (highest overall priority).

    Returns:
        Validated HederaToolsConfig instance.

    Raises:
        ConfigError: On invalid TOML, missing files, or validation failure.
    """
    merged: dict[str, Any] = {}

    files = _discover_config_files()

    if path is not None:
        p = Path(path)
        if not p.is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        files.append(p)

    for config_file in files:
        data = _read_toml(config_file)
        merged = _deep_merge(merged, data)

    merged = _apply_network_env(merged)

    if overrides:
        merged = _deep_merge(merged, overrides)

    try:
        config = HederaToolsConfig.model_validate(merged)
    except Exception as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    _resolve_operator(config)

    return config
