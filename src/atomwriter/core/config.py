import getpass
import socket
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(destination.get(key, {}), value)
        else:
            destination[key] = value
    return destination


def _login_name() -> str:
    return getpass.getuser()


def _login_email() -> str:
    return f"{_login_name()}@{socket.gethostname()}"


class AuthorSettings(BaseModel):
    """Default author used when a feed is created without one."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default_factory=_login_name, description="Default author name")
    email: str = Field(default_factory=_login_email, description="Default author email")


class AtomWriterConfig(BaseSettings):
    """Root configuration for atomwriter.

    Supports environment variable overrides with the pattern:
    ATOMWRITER_SECTION__KEY (e.g., ATOMWRITER_AUTHOR__EMAIL)
    """

    author: AuthorSettings = Field(default_factory=AuthorSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        frozen=True,
        env_prefix="ATOMWRITER_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, root: Path | None = None) -> "AtomWriterConfig":
        """Loads configuration from .atomwriter.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (ATOMWRITER_SECTION__KEY)
        2. Config file (.atomwriter.toml)
        3. Defaults
        """
        root_path = root if root is not None else Path.cwd()
        config_file = root_path / ".atomwriter.toml"

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        return cls.model_validate(merged_config)
