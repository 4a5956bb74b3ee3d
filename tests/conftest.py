"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("MOCK_USER_API", "true")
os.environ.setdefault("SUBMISSION_DELAY_SECONDS", "0")
os.environ.setdefault("USER_API_DELAY_SECONDS", "0")


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def page_cache() -> Generator[Any, None, None]:
    """Provide the global page cache, emptied before and after the test."""
    from src.services.page_cache import get_page_cache

    cache = get_page_cache()
    cache.clear()
    yield cache
    cache.clear()


@pytest.fixture
def client(page_cache: Any) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Redirects are not followed so locale redirects can be asserted.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def en_dictionary() -> Any:
    from src.i18n.utils import get_dictionary

    return get_dictionary("en")


@pytest.fixture
def ar_dictionary() -> Any:
    from src.i18n.utils import get_dictionary

    return get_dictionary("ar")
