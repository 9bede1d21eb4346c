"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.tabnest/config.toml
(or the file named by TABNEST_CONFIG). Loaded once at the CLI entry point.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomlkit

from tabnest.core.tree_types import GROUP_COLORS


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in TabNestContext.
    All fields are read-only after construction.
    """

    state_path: Path
    strip_path: Path
    holding_color: str
    host_retry_attempts: int
    host_retry_delay: float


def default_config_dir() -> Path:
    return Path.home() / ".tabnest"


def global_config_path() -> Path:
    """Get the path to the global config file.

    Returns:
        Path to config file (for error messages and debugging)
    """
    override = os.environ.get("TABNEST_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return default_config_dir() / "config.toml"


def default_global_config() -> GlobalConfig:
    config_dir = default_config_dir()
    return GlobalConfig(
        state_path=config_dir / "state.json",
        strip_path=config_dir / "strip.json",
        holding_color="grey",
        host_retry_attempts=1,
        host_retry_delay=0.5,
    )


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load global config, falling back to defaults for a missing file or key.

    Args:
        path: Config file path (defaults to global_config_path())

    Returns:
        GlobalConfig instance with loaded values

    Raises:
        ValueError: If the file is not valid TOML or a value is malformed
    """
    config_path = path if path is not None else global_config_path()
    defaults = default_global_config()

    if not config_path.exists():
        return defaults

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    holding_color = str(data.get("holding_color", defaults.holding_color))
    if holding_color not in GROUP_COLORS:
        raise ValueError(
            f"Invalid 'holding_color' in {config_path}: {holding_color!r} "
            f"(expected one of {', '.join(sorted(GROUP_COLORS))})"
        )

    attempts = data.get("host_retry_attempts", defaults.host_retry_attempts)
    if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 1:
        raise ValueError(f"Invalid 'host_retry_attempts' in {config_path}: {attempts!r}")

    delay = data.get("host_retry_delay", defaults.host_retry_delay)
    if not isinstance(delay, (int, float)) or isinstance(delay, bool) or delay < 0:
        raise ValueError(f"Invalid 'host_retry_delay' in {config_path}: {delay!r}")

    return GlobalConfig(
        state_path=_path_value(data, "state_path", defaults.state_path),
        strip_path=_path_value(data, "strip_path", defaults.strip_path),
        holding_color=holding_color,
        host_retry_attempts=attempts,
        host_retry_delay=float(delay),
    )


def save_global_config(config: GlobalConfig, path: Path | None = None) -> Path:
    """Save global config as TOML.

    Args:
        config: GlobalConfig instance to save
        path: Config file path (defaults to global_config_path())

    Returns:
        Path the config was written to
    """
    config_path = path if path is not None else global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()
    doc.add(tomlkit.comment("Global tabnest configuration"))
    doc["state_path"] = str(config.state_path)
    doc["strip_path"] = str(config.strip_path)
    doc["holding_color"] = config.holding_color
    doc["host_retry_attempts"] = config.host_retry_attempts
    doc["host_retry_delay"] = config.host_retry_delay

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return config_path


def _path_value(data: dict, key: str, default: Path) -> Path:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid '{key}': expected a non-empty path string, got {value!r}")
    return Path(value).expanduser()
