import pytest

from vouch.config import CONFIG_ENV_VAR
from vouch.core import ValidatorFactory, reset_default_factory
from vouch.core.converters import reset_default_registry


@pytest.fixture(autouse=True)
def reset_defaults(monkeypatch):
    """Fresh default registry/factory and no settings file for every test"""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_default_registry()
    reset_default_factory()
    yield
    reset_default_registry()
    reset_default_factory()


@pytest.fixture
def factory():
    return ValidatorFactory()


@pytest.fixture
def context(factory):
    """Plain value context: en_US, all groups, collect mode"""
    return factory.new_context().build()
