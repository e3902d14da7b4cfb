"""
Filters - narrow a discovered identifier list using metadata.

Filters run in registration order before any validator. A candidate whose
metadata cannot be built, or whose predicate raises, is excluded.
"""

import hashlib
import inspect
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .strategies.base import DiscoveryStrategy

logger = logging.getLogger(__name__)

_MISSING = object()


def _stable_value(value: Any) -> Any:
    """JSON fallback for filter values that keeps fingerprints stable across processes"""
    if type(value).__repr__ is not object.__repr__:
        return repr(value)
    name = f"{type(value).__module__}.{type(value).__qualname__}"
    state = getattr(value, '__dict__', None)
    if state is None:
        return name
    return {'__type__': name, **state}


def strict_equals(actual: Any, expected: Any) -> bool:
    """Equality where booleans never equal numbers (True != 1)"""
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return bool(actual == expected)


class Filter(ABC):
    """Abstract base class for identifier filters."""

    @abstractmethod
    def apply(self, identifiers: List[str], strategy: 'DiscoveryStrategy') -> List[str]:
        """Return the identifiers to keep, preserving order."""
        pass

    def fingerprint(self) -> str:
        """Stable description used to build automatic cache keys."""
        return type(self).__name__


class PropertyFilter(Filter):
    """
    Keeps identifiers whose attribute has a property matching a value.

    Usage:
        PropertyFilter('enabled', '=', True)
        PropertyFilter('priority', '>=', 5)
        PropertyFilter('tags', 'contains', 'admin')
        PropertyFilter('method', 'in', ['GET', 'HEAD'])
    """

    OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
        '=': strict_equals,
        '==': strict_equals,
        '!=': lambda a, b: not strict_equals(a, b),
        '<>': lambda a, b: not strict_equals(a, b),
        '>': lambda a, b: a > b,
        '>=': lambda a, b: a >= b,
        '<': lambda a, b: a < b,
        '<=': lambda a, b: a <= b,
        'contains': lambda a, b: not isinstance(a, (str, bytes)) and b in a,
        'in': lambda a, b: a in b,
    }

    def __init__(self, property: str, operator: str = '=', value: Any = _MISSING):
        if value is _MISSING:
            operator, value = '=', operator
        if operator not in self.OPERATORS:
            raise ConfigurationError(f"Unsupported filter operator: {operator!r}")
        self.property = property
        self.operator = operator
        self.value = value

    def apply(self, identifiers: List[str], strategy: 'DiscoveryStrategy') -> List[str]:
        kept = []
        for identifier in identifiers:
            try:
                metadata = strategy.get_metadata(identifier)
                if any(self._matches(attribute) for attribute in self._attributes(metadata)):
                    kept.append(identifier)
            except Exception as e:
                logger.debug(f"Property filter excluded {identifier}: {e}")
        return kept

    @staticmethod
    def _attributes(metadata: Dict[str, Any]) -> List[Any]:
        """The primary attribute followed by any others attached to the class"""
        attributes = []
        for attribute in [metadata.get('attribute')] + list(metadata.get('attributes') or []):
            if attribute is not None and all(attribute is not a for a in attributes):
                attributes.append(attribute)
        return attributes

    def _matches(self, attribute: Any) -> bool:
        if isinstance(attribute, Mapping):
            if self.property not in attribute:
                return False
            actual = attribute[self.property]
        else:
            actual = getattr(attribute, self.property, _MISSING)
            if actual is _MISSING:
                return False
        try:
            return bool(self.OPERATORS[self.operator](actual, self.value))
        except Exception as e:
            logger.debug(f"Cannot compare {self.property}={actual!r} {self.operator} {self.value!r}: {e}")
            return False

    def fingerprint(self) -> str:
        return json.dumps(
            [type(self).__name__, self.property, self.operator, self.value],
            default=_stable_value, sort_keys=True,
        )


class CallbackFilter(Filter):
    """Keeps identifiers for which callback(identifier, metadata) is truthy."""

    def __init__(self, callback: Callable[[str, Dict[str, Any]], bool]):
        self.callback = callback

    def apply(self, identifiers: List[str], strategy: 'DiscoveryStrategy') -> List[str]:
        kept = []
        for identifier in identifiers:
            try:
                if self.callback(identifier, strategy.get_metadata(identifier)):
                    kept.append(identifier)
            except Exception as e:
                logger.debug(f"Callback filter excluded {identifier}: {e}")
        return kept

    def fingerprint(self) -> str:
        """
        Callback name plus a digest of its code, so two lambdas in one scope
        never share a fingerprint.
        """
        module = getattr(self.callback, '__module__', '')
        name = getattr(self.callback, '__qualname__', type(self.callback).__name__)
        fingerprint = f"{type(self).__name__}:{module}.{name}"

        code = getattr(self.callback, '__code__', None)
        if code is not None:
            digest = hashlib.md5(code.co_code)
            for const in code.co_consts:
                if not inspect.iscode(const):
                    digest.update(repr(const).encode('utf-8'))
            for cell in getattr(self.callback, '__closure__', None) or ():
                try:
                    captured = json.dumps(cell.cell_contents, default=_stable_value, sort_keys=True)
                except (ValueError, TypeError):
                    captured = type(cell).__name__
                digest.update(captured.encode('utf-8'))
            fingerprint += f":{code.co_filename}:{code.co_firstlineno}:{digest.hexdigest()}"
        return fingerprint
