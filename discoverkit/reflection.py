"""
Runtime introspection helpers.

Identifiers are plain strings, so every check that needs the actual class
goes through load_class(). Failures resolve to None/False rather than
raising: a single unloadable candidate must not stop a discovery pass.
"""

import importlib
import inspect
import logging
from collections import deque
from typing import Any, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)

ClassRef = Union[str, type]


def class_name(cls: type) -> str:
    """Fully-qualified dotted name of a class"""
    return f"{cls.__module__}.{cls.__qualname__}"


def type_name(ref: Any) -> str:
    """Normalize a class or a dotted name into a dotted name"""
    if inspect.isclass(ref):
        return class_name(ref)
    return str(ref)


def iter_declared_classes() -> Iterator[type]:
    """
    Walk every class created so far in this interpreter.

    Only classes whose modules have already been imported are visible.
    Classes are yielded breadth-first from ``object``, each exactly once.
    """
    seen = {id(object)}
    queue = deque([object])
    while queue:
        current = queue.popleft()
        yield current
        try:
            subclasses = type.__subclasses__(current)
        except TypeError:
            continue
        for sub in subclasses:
            if id(sub) not in seen:
                seen.add(id(sub))
                queue.append(sub)


def _is_dotted_name(name: str) -> bool:
    return bool(name) and all(part.isidentifier() for part in name.split('.'))


def load_class(ref: ClassRef) -> Optional[type]:
    """
    Resolve a class reference to the class object.

    Tries importing the longest module prefix first, then falls back to
    the classes already declared in the interpreter (covers modules that
    were loaded under a name that is not importable).
    """
    if inspect.isclass(ref):
        return ref
    name = str(ref)
    if not _is_dotted_name(name):
        return None

    parts = name.split('.')
    for split in range(len(parts) - 1, 0, -1):
        module_name = '.'.join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except Exception as e:
            logger.debug(f"Cannot import {module_name}: {e}")
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                break
        if inspect.isclass(obj):
            return obj
        break

    for cls in iter_declared_classes():
        if class_name(cls) == name:
            return cls
    return None


def class_exists(ref: ClassRef) -> bool:
    return load_class(ref) is not None


def classes_defined_in(module: Any) -> List[str]:
    """Classes whose defining module is ``module``, in definition order"""
    names = []
    for value in vars(module).values():
        if inspect.isclass(value) and value.__module__ == module.__name__:
            names.append(class_name(value))
    return names


def source_file(ref: ClassRef) -> Optional[str]:
    """Path of the file declaring the class, or None"""
    cls = load_class(ref)
    if cls is None:
        return None
    try:
        return inspect.getsourcefile(cls)
    except (TypeError, OSError):
        return None


def is_protocol(cls: type) -> bool:
    return bool(getattr(cls, '_is_protocol', False))


def is_instantiable(cls: type) -> bool:
    """Concrete class: not abstract, not a Protocol"""
    return inspect.isclass(cls) and not inspect.isabstract(cls) and not is_protocol(cls)


def is_strict_subclass(cls: type, parent: type) -> bool:
    """Real inheritance only; virtual ABC registrations do not count"""
    return cls is not parent and parent in cls.__mro__[1:]


def implements(cls: type, interface: type) -> bool:
    """issubclass semantics, including ABC registrations, minus identity"""
    return cls is not interface and issubclass(cls, interface)
