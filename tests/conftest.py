"""Shared test fixtures for the discoverkit test suite."""

import sys
from pathlib import Path

import pytest

# Ensure discoverkit and the fixture application are importable
sys.path.insert(0, str(Path(__file__).parent.parent))

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROJECT_DIR = FIXTURES_DIR / "project"

sys.path.insert(0, str(PROJECT_DIR))

from discoverkit.attributes import default_index
from discoverkit.cache import CacheManager
from discoverkit.config import DiscoveryConfig, CacheConfig
from discoverkit.factory import StrategyFactory
from discoverkit.manager import DiscoveryManager, create_manager
from discoverkit.resolver import NamespaceResolver

# Import the fixture application so its attributes are registered
import app.cards.analytics  # noqa: E402,F401
import app.cards.dashboard  # noqa: E402,F401
import app.controllers.admin_controller  # noqa: E402,F401
import app.controllers.user_controller  # noqa: E402,F401
import app.services.billing  # noqa: E402,F401
import app.settings.app_settings  # noqa: E402,F401


@pytest.fixture
def project_dir():
    """Root of the fixture application (contains app/)."""
    return PROJECT_DIR


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def cache_manager(cache_dir):
    """An enabled cache writing to a temporary directory."""
    return CacheManager(cache_path=cache_dir, enabled=True)


@pytest.fixture
def resolver():
    return NamespaceResolver()


@pytest.fixture
def factory(resolver, project_dir):
    """Strategy factory rooted at the fixture application."""
    return StrategyFactory(resolver=resolver, base_path=project_dir, index=default_index)


@pytest.fixture
def manager(cache_manager, factory):
    """Discovery manager with caching enabled."""
    return DiscoveryManager(cache_manager, factory)


@pytest.fixture
def config(project_dir, cache_dir):
    """Configuration rooted at the fixture application."""
    return DiscoveryConfig(
        base_path=project_dir,
        cache=CacheConfig(enabled=True, path=str(cache_dir)),
        paths={
            'cards': ['app/cards'],
            'services': ['app/services'],
        },
    )


@pytest.fixture
def configured_manager(config):
    return create_manager(config)
