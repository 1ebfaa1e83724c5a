import copy
import os
from pathlib import Path
from typing import Any

import dotenv
from loguru import logger

from baseline_mcp.utility import configure_logging

from .config import Config
from .inject import ConfigStore

DEFAULT_API_BASE_URL: str = "https://api.webstatus.dev"

DEFAULT_CONFIG: dict[str, Any] = {
    "options": {
        "api_base_url": DEFAULT_API_BASE_URL,
        "user_agent": "baseline-mcp/1.0.0",
    },
    "logging": {"level": "INFO"},
}


def setup_config_store(
    filename: str = "config.yml",
    env_filename: str | None = None,
    reserve_stdout: bool = False,
) -> Config:
    """Loads configuration into the Config Store (once).

    The configuration file is taken from CONFIG_FILE if set. When no file
    exists the built-in defaults are used. API_BASE_URL overrides the
    upstream API base URL. With `reserve_stdout` no log handler writes to
    stdout, which then carries the stdio protocol stream.
    """
    store: ConfigStore = ConfigStore.get_instance()

    if store.is_configured():
        return store.config()

    env_filename = env_filename or os.getenv("ENV_FILE", ".env")
    dotenv.load_dotenv(dotenv_path=env_filename)

    config_file: str = os.getenv("CONFIG_FILE", filename)
    source: str | dict[str, Any] = config_file if Path(config_file).exists() else copy.deepcopy(DEFAULT_CONFIG)

    cfg: Config = store.configure(source=source, env_filename=env_filename, env_prefix="BASELINE_MCP")

    if not store.is_configured():
        raise ValueError("Config Store failed to configure properly")

    api_base_url: str = os.getenv("API_BASE_URL") or cfg.get("options:api_base_url") or DEFAULT_API_BASE_URL
    cfg.update(
        {
            "options:api_base_url": api_base_url.rstrip("/"),
            "runtime:config_file": config_file if isinstance(source, str) else None,
        }
    )

    configure_logging(cfg.get("logging") or {}, reserve_stdout=reserve_stdout)

    if isinstance(source, dict):
        logger.info(f"No configuration file found at {config_file}, using built-in defaults")

    logger.info(f"Config Store initialized (API base: {api_base_url})")

    return cfg
