"""
Validators - pass/fail checks over single identifiers.

Validators are combined with logical AND, so the order they are registered
in never changes the result. Any exception counts as a failed check.
"""

import logging
from abc import ABC, abstractmethod

from .reflection import ClassRef, implements, is_instantiable, is_strict_subclass, load_class, type_name

logger = logging.getLogger(__name__)


class Validator(ABC):
    """Abstract base class for validators."""

    def __call__(self, identifier: str) -> bool:
        try:
            return self.validate(identifier)
        except Exception as e:
            logger.debug(f"{type(self).__name__} rejected {identifier}: {e}")
            return False

    @abstractmethod
    def validate(self, identifier: str) -> bool:
        pass

    def fingerprint(self) -> str:
        return type(self).__name__


class InstantiableValidator(Validator):
    """Passes concrete classes: not abstract, not a Protocol."""

    def validate(self, identifier: str) -> bool:
        cls = load_class(identifier)
        return cls is not None and is_instantiable(cls)


class ExtendsValidator(Validator):
    """Passes strict subclasses of a parent class."""

    def __init__(self, parent: ClassRef):
        self.parent = type_name(parent)
        self._parent_ref = parent

    def validate(self, identifier: str) -> bool:
        parent = load_class(self._parent_ref)
        cls = load_class(identifier)
        if parent is None or cls is None:
            return False
        return is_strict_subclass(cls, parent)

    def fingerprint(self) -> str:
        return f"{type(self).__name__}:{self.parent}"


class ImplementsValidator(Validator):
    """Passes classes implementing an interface, transitively."""

    def __init__(self, interface: ClassRef):
        self.interface = type_name(interface)
        self._interface_ref = interface

    def validate(self, identifier: str) -> bool:
        interface = load_class(self._interface_ref)
        cls = load_class(identifier)
        if interface is None or cls is None:
            return False
        return implements(cls, interface)

    def fingerprint(self) -> str:
        return f"{type(self).__name__}:{self.interface}"
