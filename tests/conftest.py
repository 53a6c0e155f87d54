import os

import pytest

from tests.utils import random_lower_string
from virt_storage.config import get_settings
from virt_storage.logger import get_logger
from virt_storage.store import InMemoryStore


@pytest.fixture(autouse=True)
def clear_os_environment() -> None:
    """Clear the OS environment and the cached settings."""
    os.environ.clear()
    get_settings.cache_clear()
    get_logger.cache_clear()


@pytest.fixture
def namespace() -> str:
    """Fixture with a random namespace."""
    return random_lower_string()


@pytest.fixture
def store() -> InMemoryStore:
    """Fixture with an empty InMemoryStore."""
    return InMemoryStore()
