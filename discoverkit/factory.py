"""
Strategy factory - builds strategies with their collaborators.
"""

from pathlib import Path
from typing import Optional, Union

from .attributes import AttributeIndex, AttributeRef
from .reflection import ClassRef
from .resolver import NamespaceResolver
from .strategies import (
    AttributeStrategy,
    DirectoryStrategy,
    InterfaceStrategy,
    MethodStrategy,
    ParentClassStrategy,
    PropertyStrategy,
)
from .strategies.directory import Directories


class StrategyFactory:
    """Creates discovery strategies sharing one resolver, base path and index"""

    def __init__(self, resolver: Optional[NamespaceResolver] = None,
                 base_path: Optional[Union[str, Path]] = None,
                 index: Optional[AttributeIndex] = None):
        self.resolver = resolver or NamespaceResolver()
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.index = index

    def create_attribute_strategy(self, attribute: AttributeRef) -> AttributeStrategy:
        return AttributeStrategy(attribute, self.index)

    def create_directory_strategy(self, directories: Directories) -> DirectoryStrategy:
        return DirectoryStrategy(directories, self.resolver, self.base_path, self.index)

    def create_interface_strategy(self, interface: ClassRef) -> InterfaceStrategy:
        return InterfaceStrategy(interface, self)

    def create_parent_class_strategy(self, parent: ClassRef) -> ParentClassStrategy:
        return ParentClassStrategy(parent, self)

    def create_method_strategy(self, attribute: AttributeRef) -> MethodStrategy:
        return MethodStrategy(attribute, self.index)

    def create_property_strategy(self, attribute: AttributeRef) -> PropertyStrategy:
        return PropertyStrategy(attribute, self.index)
