"""
Attribute index for discoverkit.

Attributes are plain classes (usually dataclasses) deriving from
``Attribute``. An attribute instance is a decorator: applying it to a class,
a method or a property records the target in the index so that strategies
can find everything carrying a given attribute type.

Usage:
    @dataclass
    class Route(Attribute):
        method: str = 'GET'
        path: str = '/'

    class UserController:
        @Route(method='GET', path='/users')
        def index(self):
            ...

    default_index.find_target_methods(Route)

Targets are only known once the module declaring them has been imported.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Union

from .models import TargetClass, TargetMethod, TargetProperty
from .reflection import class_name, type_name

logger = logging.getLogger(__name__)

AttributeRef = Union[str, type]


def _owner_of(func: Callable) -> str:
    """Dotted name of the class a function is defined in (module for free functions)"""
    owner, _, _ = func.__qualname__.rpartition('.')
    if owner:
        return f"{func.__module__}.{owner}"
    return func.__module__


class AttributeIndex:
    """
    Registry of attribute targets keyed by attribute type name.

    Provides:
    - Registration of classes, methods and properties
    - Lookup of targets by attribute type (class or dotted name)
    """

    def __init__(self) -> None:
        self._classes: Dict[str, List[TargetClass]] = {}
        self._methods: Dict[str, List[TargetMethod]] = {}
        self._properties: Dict[str, List[TargetProperty]] = {}

    def register(self, attribute: Any, target: Any) -> Any:
        """
        Record ``target`` as carrying ``attribute``.

        Classes, functions, staticmethod/classmethod objects and properties
        are accepted. The target is returned unchanged so this can back a
        decorator. Re-importing a module does not duplicate entries.
        """
        key = class_name(type(attribute))

        if inspect.isclass(target):
            entry = TargetClass(attribute=attribute, name=class_name(target))
            self._add(self._classes, key, entry)
        elif isinstance(target, property):
            func = target.fget
            entry = TargetProperty(attribute=attribute, class_name=_owner_of(func), name=func.__name__)
            self._add(self._properties, key, entry)
        elif isinstance(target, (staticmethod, classmethod)):
            func = target.__func__
            entry = TargetMethod(attribute=attribute, class_name=_owner_of(func), name=func.__name__)
            self._add(self._methods, key, entry)
        elif callable(target) and hasattr(target, '__qualname__'):
            entry = TargetMethod(attribute=attribute, class_name=_owner_of(target), name=target.__name__)
            self._add(self._methods, key, entry)
        else:
            raise TypeError(f"{key} cannot decorate {type(target).__name__} objects")

        logger.debug(f"Registered {key} target: {entry}")
        return target

    @staticmethod
    def _add(bucket: Dict[str, list], key: str, entry: Any) -> None:
        entries = bucket.setdefault(key, [])
        if entry not in entries:
            entries.append(entry)

    def find_target_classes(self, attribute: AttributeRef) -> List[TargetClass]:
        """Classes decorated with the attribute, in registration order"""
        return list(self._classes.get(type_name(attribute), []))

    def find_target_methods(self, attribute: AttributeRef) -> List[TargetMethod]:
        """Methods decorated with the attribute, in registration order"""
        return list(self._methods.get(type_name(attribute), []))

    def find_target_properties(self, attribute: AttributeRef) -> List[TargetProperty]:
        """Properties decorated with the attribute, in registration order"""
        return list(self._properties.get(type_name(attribute), []))

    def attributes_of(self, class_name: str) -> List[Any]:
        """Attribute instances attached to a class, grouped by attribute type"""
        found = []
        for entries in self._classes.values():
            found.extend(entry.attribute for entry in entries if entry.name == class_name)
        return found

    def clear(self) -> None:
        """Clear all registrations (useful for testing)."""
        self._classes.clear()
        self._methods.clear()
        self._properties.clear()

    def stats(self) -> Dict[str, int]:
        """Get registration statistics."""
        return {
            'attributes': len(set(self._classes) | set(self._methods) | set(self._properties)),
            'classes': sum(len(v) for v in self._classes.values()),
            'methods': sum(len(v) for v in self._methods.values()),
            'properties': sum(len(v) for v in self._properties.values()),
        }


default_index = AttributeIndex()


def get_default_index() -> AttributeIndex:
    return default_index


class Attribute:
    """
    Base class for discovery attributes.

    Instances decorate classes, methods and properties. Subclasses define
    their fields, typically as dataclasses.
    """

    def __call__(self, target: Any) -> Any:
        return default_index.register(self, target)
