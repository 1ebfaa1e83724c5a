from __future__ import annotations

import io
from inspect import isclass
from pathlib import Path
from typing import Any, Type

import yaml
from dotenv import load_dotenv

from baseline_mcp.utility import dget, dotexists, dotset, env2dict, replace_env_vars


class Config:
    """Container for configuration elements."""

    def __init__(
        self,
        *,
        data: dict | None = None,
        filename: str | None = None,
    ):
        self.data: dict | None = data
        self.filename: str | None = filename

    def get(self, *keys: str, default: Any | Type[Any] = None, mandatory: bool = False) -> Any:
        if self.data is None:
            raise ValueError("Configuration not initialized")

        if mandatory and not self.exists(*keys):
            raise ValueError(f"Missing mandatory key: {'/'.join(keys)}")

        value: Any = dget(self.data, *keys)

        if value is not None:
            return value

        if callable(default) and not isinstance(default, type):
            return default()

        return default() if isclass(default) else default

    def update(self, data: tuple[str, Any] | dict[str, Any] | list[tuple[str, Any]]) -> None:
        if self.data is None:
            self.data = {}
        items = [data] if isinstance(data, tuple) else data.items() if isinstance(data, dict) else data
        for key, value in items:
            dotset(self.data, key, value)

    def exists(self, *keys: str) -> bool:
        return False if self.data is None else dotexists(self.data, *keys)


class ConfigFactory:
    """Factory for creating Config instances."""

    def load(
        self,
        *,
        source: str | dict | Config | None = None,
        env_filename: str | None = None,
        env_prefix: str | None = None,
    ) -> Config:

        load_dotenv(dotenv_path=env_filename)

        if isinstance(source, Config):
            return source

        if source is None:
            source = {}

        data: dict = (
            (
                yaml.safe_load(Path(source).read_text(encoding="utf-8"))
                if self.is_config_path(source, raise_if_missing=True)
                else yaml.safe_load(io.StringIO(source))
            )
            if isinstance(source, str)
            else source
        )

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise TypeError(f"expected dict, found '{type(data)}'")

        # Update data based on environment variables with a name that starts with `env_prefix`
        data = env2dict(env_prefix, data)

        data = replace_env_vars(data)

        return Config(
            data=data,
            filename=source if self.is_config_path(source, raise_if_missing=False) else None,
        )

    @staticmethod
    def is_config_path(source: Any, raise_if_missing: bool = True) -> bool:
        """Test if the source is a valid path to a configuration file."""
        if not isinstance(source, str):
            return False
        if not source.endswith(".yaml") and not source.endswith(".yml"):
            return False
        if raise_if_missing and not Path(source).exists():
            raise FileNotFoundError(f"Configuration file not found: {source}")
        return True
