from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Self, TypeVar

from .config import Config, ConfigFactory

T = TypeVar("T", str, int, float)

# pylint: disable=global-statement


class ConfigProvider(ABC):
    """Abstract configuration provider for dependency injection"""

    @abstractmethod
    def get_config(self) -> Config:
        """Get the active configuration"""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if a configuration has been loaded"""


class SingletonConfigProvider(ConfigProvider):
    """Production config provider backed by the Config Store singleton"""

    def get_config(self) -> Config:
        return ConfigStore.get_instance().config()

    def is_configured(self) -> bool:
        return ConfigStore.get_instance().is_configured()


class MockConfigProvider(ConfigProvider):
    """Test config provider with a fixed configuration"""

    def __init__(self, config: Config):
        self._config = config

    def get_config(self) -> Config:
        return self._config

    def is_configured(self) -> bool:
        return self._config is not None


_current_provider: ConfigProvider = SingletonConfigProvider()
_provider_lock = threading.Lock()


def get_config_provider() -> ConfigProvider:
    return _current_provider


def set_config_provider(provider: ConfigProvider) -> ConfigProvider:
    """Set the current configuration provider, returns the previous one"""
    global _current_provider
    with _provider_lock:
        old_provider = _current_provider
        _current_provider = provider
        return old_provider


def reset_config_provider() -> None:
    global _current_provider
    with _provider_lock:
        _current_provider = SingletonConfigProvider()


@dataclass
class ConfigValue(Generic[T]):
    """A value resolved lazily from the current configuration provider.

    `key` may list alternatives separated by ',', the first one present wins.
    """

    key: str
    default: T | None = None
    description: str | None = None

    def resolve(self) -> T:
        config: Config = get_config_provider().get_config()
        return config.get(*self.key.split(","), default=self.default)


class ConfigStore:
    """Holds the process-wide configuration"""

    _instance: "ConfigStore | None" = None
    _lock = threading.Lock()

    def __init__(self):
        if ConfigStore._instance is not None:
            raise RuntimeError("ConfigStore is a singleton. Use get_instance()")
        self._config: Config | None = None

    @classmethod
    def get_instance(cls) -> Self:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton - useful for testing"""
        with cls._lock:
            cls._instance = None
            reset_config_provider()

    def is_configured(self) -> bool:
        return isinstance(self._config, Config)

    def config(self) -> Config:
        if not self.is_configured():
            raise ValueError("Config Store not properly initialized")
        return self._config

    def configure(
        self,
        *,
        source: Config | str | dict[str, Any],
        env_filename: str | None = None,
        env_prefix: str | None = None,
    ) -> Config:
        cfg: Config = (
            source
            if isinstance(source, Config)
            else ConfigFactory().load(source=source, env_filename=env_filename, env_prefix=env_prefix)
        )
        self._config = cfg
        return cfg
