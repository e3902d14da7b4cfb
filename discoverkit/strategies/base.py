"""
Base class for discovery strategies.

A strategy produces identifiers for one subject criterion:
- discover: list identifiers (class names, Class::method, Class::$property)
- get_metadata: describe a single identifier
- get_cache_key: stable fingerprint of the strategy configuration

Strategies never raise for data-absence conditions; they return an empty
list instead. Only setup defects raise (see discoverkit.exceptions).
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Dict, List


def md5(value: str) -> str:
    return hashlib.md5(value.encode('utf-8')).hexdigest()


class DiscoveryStrategy(ABC):
    """Abstract base class for all discovery strategies."""

    @property
    def name(self) -> str:
        """Short name used in logs and errors."""
        return type(self).__name__

    @abstractmethod
    def discover(self) -> List[str]:
        """Discover identifiers matching this strategy's criterion."""
        pass

    @abstractmethod
    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        """Metadata for one discovered identifier."""
        pass

    @abstractmethod
    def get_cache_key(self) -> str:
        """Stable cache key for this strategy's configuration."""
        pass
