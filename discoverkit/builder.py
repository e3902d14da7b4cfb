"""
DiscoveryBuilder - fluent configuration and execution of a discovery.

Usage:
    manager.attribute(Card).where('enabled', True).cached('cards').get()

    manager.directories('packages/*/src/commands') \\
        .extending(Command) \\
        .instantiable() \\
        .cached() \\
        .classes()

get() always runs the strategy, then either reuses the cached identifier
list or applies filters (in order) followed by validators (all must pass).
Metadata is rebuilt for every call and never cached.
"""

import hashlib
import logging
from typing import Any, Callable, Dict, List, Optional

from .cache import CacheManager
from .filters import _MISSING, CallbackFilter, Filter, PropertyFilter
from .reflection import ClassRef, source_file
from .strategies.base import DiscoveryStrategy
from .strategies.directory import Directories, DirectoryStrategy
from .strategies.subtype import SubtypeStrategy
from .validators import ExtendsValidator, ImplementsValidator, InstantiableValidator, Validator

logger = logging.getLogger(__name__)


class DiscoveryBuilder:
    """Chainable discovery query over a single strategy"""

    def __init__(self, cache_manager: CacheManager, strategy: Optional[DiscoveryStrategy] = None):
        self.cache_manager = cache_manager
        self.strategy = strategy
        self.filters: List[Filter] = []
        self.validators: List[Validator] = []
        self._cache_enabled = False
        self._cache_key: Optional[str] = None

    def set_strategy(self, strategy: DiscoveryStrategy) -> 'DiscoveryBuilder':
        self.strategy = strategy
        return self

    def where(self, property: str, operator: Any, value: Any = _MISSING) -> 'DiscoveryBuilder':
        """
        Filter by an attribute property.

        where('enabled', True) compares for equality; where('priority', '>=', 5)
        uses an explicit operator.
        """
        self.filters.append(PropertyFilter(property, operator, value))
        return self

    def filter(self, callback: Callable[[str, Dict[str, Any]], bool]) -> 'DiscoveryBuilder':
        """Filter with callback(identifier, metadata)"""
        self.filters.append(CallbackFilter(callback))
        return self

    def extending(self, parent: ClassRef) -> 'DiscoveryBuilder':
        self.validators.append(ExtendsValidator(parent))
        return self

    def implementing(self, interface: ClassRef) -> 'DiscoveryBuilder':
        self.validators.append(ImplementsValidator(interface))
        return self

    def implements(self, interface: ClassRef) -> 'DiscoveryBuilder':
        """Alias for implementing()"""
        return self.implementing(interface)

    def instantiable(self) -> 'DiscoveryBuilder':
        self.validators.append(InstantiableValidator())
        return self

    def directories(self, directories: Directories) -> 'DiscoveryBuilder':
        """
        Replace the scanned directories (directory strategy) or scope
        interface/parent discovery to them. Ignored by other strategies.
        """
        if isinstance(self.strategy, DirectoryStrategy):
            self.strategy.set_directories(directories)
        elif isinstance(self.strategy, SubtypeStrategy):
            self.strategy.directories(directories)
        return self

    def with_namespace_pattern(self, pattern: str) -> 'DiscoveryBuilder':
        """Custom namespace pattern (directory strategy only)"""
        if isinstance(self.strategy, DirectoryStrategy):
            self.strategy.set_namespace_pattern(pattern)
        return self

    def cached(self, key: Optional[str] = None) -> 'DiscoveryBuilder':
        """Enable caching under key, or under a key derived from the query"""
        self._cache_enabled = True
        self._cache_key = key
        return self

    @property
    def cache_key(self) -> Optional[str]:
        """Effective cache key, or None when caching is off"""
        if not self._cache_enabled:
            return None
        if self._cache_key is not None:
            return self._cache_key

        parts = [self.strategy.get_cache_key()]
        parts.extend(f.fingerprint() for f in self.filters)
        parts.extend(v.fingerprint() for v in self.validators)
        return 'auto:' + hashlib.md5('|'.join(parts).encode('utf-8')).hexdigest()

    def get(self) -> Dict[str, Dict[str, Any]]:
        """Run the discovery and return identifier -> metadata"""
        identifiers = self.strategy.discover()

        key = self.cache_key
        cached = self.cache_manager.get(key) if key is not None else None
        if cached is not None:
            logger.debug(f"Using cached discovery results for {key}")
            identifiers = cached
        else:
            identifiers = self._apply_filters_and_validators(identifiers)
            if key is not None:
                self.cache_manager.put(key, identifiers)

        return {identifier: self.strategy.get_metadata(identifier) for identifier in identifiers}

    def classes(self) -> List[str]:
        """Identifiers only"""
        return list(self.get())

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return dict(self.get())

    def paths(self) -> List[str]:
        """
        Directories scanned (directory strategy) or the source files of the
        discovered classes (other strategies).
        """
        identifiers = self.classes()

        if isinstance(self.strategy, DirectoryStrategy):
            return self.strategy.get_directories()

        paths: List[str] = []
        for identifier in identifiers:
            filename = source_file(identifier.partition('::')[0])
            if filename is not None and filename not in paths:
                paths.append(filename)
        return paths

    def register(self, callback: Callable[[str, Dict[str, Any]], Any]) -> List[str]:
        """Call callback(identifier, metadata) for each result"""
        results = self.get()
        for identifier, metadata in results.items():
            callback(identifier, metadata)
        return list(results)

    def _apply_filters_and_validators(self, identifiers: List[str]) -> List[str]:
        for f in self.filters:
            identifiers = f.apply(identifiers, self.strategy)

        return [
            identifier for identifier in identifiers
            if all(validator(identifier) for validator in self.validators)
        ]
