from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomlkit
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from tomlkit.exceptions import ParseError as TomlParseError

from ccc_cli.constant import AGENTS_SUBDIR, HOOKS_SUBDIR
from ccc_cli.exception import ConfigError
from ccc_cli.share import get_config_dir, get_system_resources_dir
from ccc_cli.utils.logging import level_to_no

CONFIG_FILE_NAME = "config.toml"


class LoggingConfig(BaseModel):
    """Per-module log levels, e.g. `{"default": "INFO", "ccc_cli.hooks": "DEBUG"}`."""

    levels: dict[str, str] = Field(default_factory=dict)

    @field_validator("levels")
    @classmethod
    def check_levels(cls, value: dict[str, str]) -> dict[str, str]:
        for level in value.values():
            level_to_no(level)
        return value


class Config(BaseModel):
    """User configuration loaded from `~/.ccc/config.toml`."""

    system_dir: Path | None = Field(
        default=None,
        description="Root of the base-tier resources. Default: the bundled resources.",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class SourceDirs(BaseModel):
    """Read-only set of directories the loaders resolve resources from."""

    model_config = ConfigDict(frozen=True)

    base_agents: Path
    override_agents: Path
    base_hooks: Path
    override_hooks: Path

    @classmethod
    def resolve(cls, config: Config, config_dir: Path | None = None) -> SourceDirs:
        user_root = config_dir or get_config_dir()
        system_root = (config.system_dir or get_system_resources_dir()).expanduser()
        return cls(
            base_agents=system_root / AGENTS_SUBDIR,
            override_agents=user_root / AGENTS_SUBDIR,
            base_hooks=system_root / HOOKS_SUBDIR,
            override_hooks=user_root / HOOKS_SUBDIR,
        )


def get_default_config() -> Config:
    return Config()


def get_config_file() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def load_config(config_file: Path | None = None) -> Config:
    """Load the user configuration, falling back to defaults when the file is absent.

    Raises:
        ConfigError: If the file exists but is not valid JSON/TOML or fails validation.
    """
    config_file = config_file or get_config_file()
    if not config_file.exists():
        logger.debug("No config file at {path}, using defaults", path=config_file)
        return get_default_config()
    logger.debug("Loading config from {path}", path=config_file)
    return load_config_from_string(config_file.read_text(encoding="utf-8"))


def load_config_from_string(text: str) -> Config:
    """Parse configuration text, accepting either JSON or TOML."""
    data: Any
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = tomlkit.loads(text).unwrap()
        except TomlParseError as e:
            raise ConfigError(f"Invalid configuration text: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
