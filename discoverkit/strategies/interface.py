"""
Interface strategy - finds classes implementing an interface.

An interface is an ABC or a runtime-checkable Protocol. Virtual subclasses
registered with ABC.register() count as implementations.
"""

from ..reflection import implements
from .subtype import SubtypeStrategy


class InterfaceStrategy(SubtypeStrategy):
    """Discovers implementations of an interface."""

    metadata_key = 'interface'

    def matches(self, cls: type, target: type) -> bool:
        return implements(cls, target)
