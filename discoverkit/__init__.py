"""
discoverkit - Discover classes, methods and properties by attribute,
directory, interface or parent class, with filtering and file caching.

Discovery Strategies:
    1. Attribute - classes decorated with an Attribute subclass
    2. Directory - classes declared in Python files under directories
    3. Interface - implementations of an ABC or runtime-checkable Protocol
    4. Parent class - subclasses by real inheritance
    5. Method / Property - members decorated with an Attribute subclass

Quick Start:
    >>> from dataclasses import dataclass
    >>> from discoverkit import Attribute, create_manager
    >>>
    >>> @dataclass
    ... class Card(Attribute):
    ...     enabled: bool = True
    ...     priority: int = 0
    >>>
    >>> @Card(enabled=True, priority=10)
    ... class DashboardCard:
    ...     pass
    >>>
    >>> manager = create_manager()
    >>> manager.attribute(Card).where('enabled', True).classes()
"""

__version__ = "0.3.0"

from .attributes import Attribute, AttributeIndex, default_index, get_default_index
from .builder import DiscoveryBuilder
from .cache import CacheManager
from .config import DiscoveryConfig, load_config
from .exceptions import ConfigurationError, DiscoveryError, IndexUnavailableError
from .factory import StrategyFactory
from .filters import CallbackFilter, Filter, PropertyFilter
from .manager import DiscoveryManager, create_manager, discovery
from .resolver import NamespaceResolver
from .strategies import (
    AttributeStrategy,
    DirectoryStrategy,
    DiscoveryStrategy,
    InterfaceStrategy,
    MethodStrategy,
    ParentClassStrategy,
    PropertyStrategy,
)
from .validators import ExtendsValidator, ImplementsValidator, InstantiableValidator, Validator

__all__ = [
    # Core
    'DiscoveryManager',
    'DiscoveryBuilder',
    'create_manager',
    'discovery',
    'StrategyFactory',
    'CacheManager',
    'NamespaceResolver',
    # Attributes
    'Attribute',
    'AttributeIndex',
    'default_index',
    'get_default_index',
    # Strategies
    'DiscoveryStrategy',
    'AttributeStrategy',
    'DirectoryStrategy',
    'InterfaceStrategy',
    'ParentClassStrategy',
    'MethodStrategy',
    'PropertyStrategy',
    # Filters and validators
    'Filter',
    'PropertyFilter',
    'CallbackFilter',
    'Validator',
    'InstantiableValidator',
    'ExtendsValidator',
    'ImplementsValidator',
    # Configuration and errors
    'DiscoveryConfig',
    'load_config',
    'DiscoveryError',
    'ConfigurationError',
    'IndexUnavailableError',
]
