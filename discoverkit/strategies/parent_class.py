"""
Parent class strategy - finds classes inheriting from a parent class.
"""

from ..reflection import is_strict_subclass
from .subtype import SubtypeStrategy


class ParentClassStrategy(SubtypeStrategy):
    """Discovers subclasses of a parent class by real inheritance."""

    metadata_key = 'parent'

    def matches(self, cls: type, target: type) -> bool:
        return is_strict_subclass(cls, target)
