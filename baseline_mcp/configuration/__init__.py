from .config import Config, ConfigFactory
from .inject import (
    ConfigProvider,
    ConfigStore,
    ConfigValue,
    MockConfigProvider,
    SingletonConfigProvider,
    get_config_provider,
    reset_config_provider,
    set_config_provider,
)
from .setup import DEFAULT_API_BASE_URL, DEFAULT_CONFIG, setup_config_store

__all__ = [
    "Config",
    "ConfigFactory",
    "ConfigProvider",
    "ConfigStore",
    "ConfigValue",
    "MockConfigProvider",
    "SingletonConfigProvider",
    "get_config_provider",
    "reset_config_provider",
    "set_config_provider",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_CONFIG",
    "setup_config_store",
]
