"""
DiscoveryManager - entry points for building discovery queries.

Quick Start:
    >>> from discoverkit import create_manager
    >>> manager = create_manager()
    >>> cards = manager.attribute(Card).where('enabled', True).get()
"""

import logging
from pathlib import Path
from typing import List, Optional

from .attributes import AttributeIndex, AttributeRef, get_default_index
from .builder import DiscoveryBuilder
from .cache import CacheManager
from .config import DiscoveryConfig, load_config
from .factory import StrategyFactory
from .reflection import ClassRef
from .resolver import NamespaceResolver
from .strategies.directory import Directories, expand_directories, normalize_directories

logger = logging.getLogger(__name__)


class DiscoveryManager:
    """Creates a DiscoveryBuilder per query, each with a fresh strategy"""

    def __init__(self, cache_manager: CacheManager, strategy_factory: StrategyFactory):
        self.cache_manager = cache_manager
        self.strategy_factory = strategy_factory

    def _builder(self, strategy) -> DiscoveryBuilder:
        return DiscoveryBuilder(self.cache_manager).set_strategy(strategy)

    def attribute(self, attribute: AttributeRef) -> DiscoveryBuilder:
        """Classes decorated with an attribute"""
        return self._builder(self.strategy_factory.create_attribute_strategy(attribute))

    def directories(self, directories: Directories) -> DiscoveryBuilder:
        """Classes declared in Python files under directories"""
        return self._builder(self.strategy_factory.create_directory_strategy(directories))

    def implementing(self, interface: ClassRef) -> DiscoveryBuilder:
        """Classes implementing an interface"""
        return self._builder(self.strategy_factory.create_interface_strategy(interface))

    def extending(self, parent: ClassRef) -> DiscoveryBuilder:
        """Classes inheriting from a parent class"""
        return self._builder(self.strategy_factory.create_parent_class_strategy(parent))

    def methods(self, attribute: AttributeRef) -> DiscoveryBuilder:
        """Methods decorated with an attribute"""
        return self._builder(self.strategy_factory.create_method_strategy(attribute))

    def properties(self, attribute: AttributeRef) -> DiscoveryBuilder:
        """Properties decorated with an attribute"""
        return self._builder(self.strategy_factory.create_property_strategy(attribute))

    def clear_cache(self, key: Optional[str] = None) -> None:
        self.cache_manager.clear(key)

    def finder(self, directories: Directories, pattern: str = '*.py') -> List[Path]:
        """Files matching pattern under the (glob-expanded) directories"""
        expanded = expand_directories(normalize_directories(directories), self.strategy_factory.base_path)
        files: List[Path] = []
        for directory in expanded:
            files.extend(sorted(p for p in Path(directory).rglob(pattern) if p.is_file()))
        return files


def create_resolver(config: DiscoveryConfig) -> NamespaceResolver:
    monorepo = config.monorepo
    return NamespaceResolver(
        packages_namespace=monorepo.packages.namespace,
        modules_namespace=monorepo.modules.namespace,
        app_namespace=monorepo.app.namespace,
        packages_dir=monorepo.packages.directory,
        modules_dir=monorepo.modules.directory,
        app_dir=monorepo.app.directory,
    )


def create_manager(config: Optional[DiscoveryConfig] = None,
                   index: Optional[AttributeIndex] = None) -> DiscoveryManager:
    """Factory function to create a configured DiscoveryManager

    Args:
        config: Discovery configuration (loaded with load_config() when omitted)
        index: Attribute index (the process-wide default index when omitted)

    Returns:
        Configured DiscoveryManager instance
    """
    config = config or load_config()
    cache_manager = CacheManager(
        cache_path=config.cache_path,
        enabled=config.cache.enabled,
        ttl=config.cache.ttl,
    )
    factory = StrategyFactory(
        resolver=create_resolver(config),
        base_path=config.base_path,
        index=index or get_default_index(),
    )
    return DiscoveryManager(cache_manager, factory)


_default_manager: Optional[DiscoveryManager] = None


def discovery() -> DiscoveryManager:
    """Process-wide manager built from the default configuration"""
    global _default_manager
    if _default_manager is None:
        _default_manager = create_manager()
    return _default_manager
