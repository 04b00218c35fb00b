"""Shared fixtures for unit tests."""

import pytest

from orm_http_errors.config import get_settings
from orm_http_errors.core.orm_errors import OrmValidationError


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings are cached; clear them around every test so env overrides apply."""
    monkeypatch.delenv("ORM_HTTP_ERRORS_DEBUG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def two_attr_error():
    return OrmValidationError(invalid_attributes={
        "thisAttr": [{"rule": "isUnique"}],
        "thatAttr": [{"rule": "isUnique"}],
    })
