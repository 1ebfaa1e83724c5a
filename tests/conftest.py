import copy
import os
from typing import Any, Generator

import pytest

from baseline_mcp.configuration import Config, ConfigFactory, ConfigStore, MockConfigProvider, reset_config_provider
from tests.fakes import GRID_FEATURE

# pylint: disable=unused-argument, redefined-outer-name


def pytest_sessionstart(session) -> None:
    """Hook to run before any tests are executed."""
    os.environ["CONFIG_FILE"] = "./tests/config.yml"
    os.environ["ENV_FILE"] = "./tests/.env"
    os.environ.pop("API_BASE_URL", None)


@pytest.fixture(autouse=True)
def setup_reset_config() -> Generator[None, Any, None]:
    """Reset Config Store and provider before each test"""
    ConfigStore.reset_instance()
    reset_config_provider()
    yield
    ConfigStore.reset_instance()
    reset_config_provider()


@pytest.fixture
def test_config() -> Config:
    """Provide test configuration"""
    return ConfigFactory().load(source="./tests/config.yml", env_filename="./tests/.env")


@pytest.fixture
def test_provider(test_config: Config) -> MockConfigProvider:
    return MockConfigProvider(test_config)


@pytest.fixture
def grid_feature() -> dict[str, Any]:
    return copy.deepcopy(GRID_FEATURE)
