"""Configuration system for headgrid using pydantic-settings.

Supports layered configuration:
1. Built-in defaults (lowest priority)
2. pyproject.toml [tool.headgrid] section (project-level)
3. ./headgrid.toml (project-level, explicit)
4. ~/.config/headgrid/config.toml (user-level, overrides project)
5. HEADGRID_CONFIG_FILE (explicit file override)
6. Environment variables (highest priority)

Environment variables use HEADGRID_ prefix with nested delimiter __.
Example: HEADGRID_LOG__LEVEL=DEBUG, HEADGRID_GRID__STRICT=true
"""

from __future__ import annotations

import os
import sys
import tomllib

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .log import DEFAULT_FORMAT, warn


def _user_config_path() -> Path:
    """Return the user-level config file location for this platform."""
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", "~")) / "headgrid" / "config.toml"
    return Path("~/.config/headgrid/config.toml")


def _find_config_files() -> list[Path]:
    """Find all configuration files in order of precedence (lowest first)."""
    files = []

    pyproject = Path("pyproject.toml")
    if pyproject.exists():
        files.append(pyproject)

    headgrid_toml = Path("headgrid.toml")
    if headgrid_toml.exists():
        files.append(headgrid_toml)

    user_config = _user_config_path().expanduser()
    if user_config.exists():
        files.append(user_config)

    env_config = os.environ.get("HEADGRID_CONFIG_FILE")
    if env_config:
        env_path = Path(env_config)
        if env_path.exists():
            files.append(env_path)

    return files


def _load_toml_config() -> dict[str, Any]:
    """Load and merge all TOML configuration files."""
    merged: dict[str, Any] = {}

    for config_file in _find_config_files():
        try:
            data = tomllib.loads(config_file.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            warn(f"Ignoring unreadable config file {config_file}: {e}")
            continue

        if config_file.name == "pyproject.toml":
            data = data.get("tool", {}).get("headgrid", {})

        merged = _deep_merge(merged, data)

    return merged


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class LogSettings(BaseSettings):
    """Logging settings.

    Environment prefix: HEADGRID_LOG__
    Example: HEADGRID_LOG__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="HEADGRID_LOG__",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = DEFAULT_FORMAT


class GridSettings(BaseSettings):
    """Header grid construction settings.

    Environment prefix: HEADGRID_GRID__
    Example: HEADGRID_GRID__STRICT=true
    """

    model_config = SettingsConfigDict(
        env_prefix="HEADGRID_GRID__",
        extra="ignore",
    )

    strict: bool = Field(
        default=False,
        description=(
            "Validate column trees (empty groups, duplicate keys, cycles) "
            "before collecting leaves or building header grids."
        ),
    )


_SECTION_CLASSES: dict[str, type[BaseSettings]] = {
    "log": LogSettings,
    "grid": GridSettings,
}


def _without_env_overrides(
    section: dict[str, Any], section_cls: type[BaseSettings]
) -> dict[str, Any]:
    """Drop TOML keys that are also set through the section's environment prefix."""
    prefix = str(section_cls.model_config.get("env_prefix", "")).upper()
    env_names = {name.upper() for name in os.environ}
    return {k: v for k, v in section.items() if f"{prefix}{k.upper()}" not in env_names}


class HeadGridSettings(BaseSettings):
    """Main settings aggregating all configuration sections.

    Environment prefix: HEADGRID__
    """

    model_config = SettingsConfigDict(
        env_prefix="HEADGRID__",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log: LogSettings = Field(default_factory=LogSettings)
    grid: GridSettings = Field(default_factory=GridSettings)

    def __init__(self, **data: Any) -> None:
        toml_config = _load_toml_config()

        # Build TOML-backed sections eagerly so their own env vars still win
        for name, section_cls in _SECTION_CLASSES.items():
            section = toml_config.get(name)
            if isinstance(section, dict):
                toml_config[name] = section_cls(**_without_env_overrides(section, section_cls))

        # Explicit keyword arguments take precedence over everything
        merged = _deep_merge(toml_config, data)
        super().__init__(**merged)

    def _sections(self) -> list[tuple[str, str, BaseSettings]]:
        return [
            ("Logging", "log", self.log),
            ("Grid", "grid", self.grid),
        ]

    def to_toml(self) -> str:
        """Export settings as TOML string."""
        lines = ["# headgrid Configuration", "# Generated by: headgrid config --toml", ""]

        for _, section_name, section in self._sections():
            lines.append(f"[{section_name}]")
            for field_name, field_value in section.model_dump().items():
                if isinstance(field_value, bool):
                    value_str = "true" if field_value else "false"
                elif isinstance(field_value, str):
                    value_str = f'"{field_value}"'
                else:
                    value_str = str(field_value)
                lines.append(f"{field_name} = {value_str}")
            lines.append("")

        return "\n".join(lines)

    def to_env(self) -> str:
        """Export settings as shell environment variables."""
        lines = [
            "# headgrid Environment Variables",
            "# Generated by: headgrid config --env",
            "",
        ]

        for _, section_name, section in self._sections():
            for field_name, field_value in section.model_dump().items():
                env_name = f"HEADGRID_{section_name.upper()}__{field_name.upper()}"
                if isinstance(field_value, bool):
                    value_str = "true" if field_value else "false"
                else:
                    value_str = str(field_value)
                lines.append(f'export {env_name}="{value_str}"')

        return "\n".join(lines)

    def show(self) -> str:
        """Format settings as a readable table."""
        lines = ["headgrid Configuration", "=" * 60, ""]

        for display_name, _, section in self._sections():
            lines.append(f"\n{display_name}")
            lines.append("-" * 40)
            for field_name, field_value in section.model_dump().items():
                value_str = str(field_value)
                if len(value_str) > 50:
                    value_str = value_str[:47] + "..."
                lines.append(f"  {field_name:20} = {value_str}")

        return "\n".join(lines)


@lru_cache(maxsize=1)
def get_settings() -> HeadGridSettings:
    """Get the global settings instance (cached).

    Call clear_settings() to reload configuration.
    """
    return HeadGridSettings()


def clear_settings() -> None:
    """Clear the cached settings to force reload."""
    get_settings.cache_clear()


def reload_settings() -> HeadGridSettings:
    """Reload settings from all sources."""
    clear_settings()
    return get_settings()
