"""
discoverkit strategies

Components:
- base: DiscoveryStrategy abstract base class
- attribute/method/property: attribute index lookups
- directory: source tree scanning
- interface/parent_class: subtype discovery (global or directory-scoped)
"""

from .base import DiscoveryStrategy
from .attribute import AttributeStrategy
from .directory import DirectoryStrategy
from .interface import InterfaceStrategy
from .method import MethodStrategy
from .parent_class import ParentClassStrategy
from .property import PropertyStrategy
from .subtype import SubtypeStrategy

__all__ = [
    'DiscoveryStrategy',
    'AttributeStrategy',
    'DirectoryStrategy',
    'InterfaceStrategy',
    'MethodStrategy',
    'ParentClassStrategy',
    'PropertyStrategy',
    'SubtypeStrategy',
]
