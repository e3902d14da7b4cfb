"""
Shared implementation of the interface and parent-class strategies.

Global mode walks every class declared in the interpreter, so only classes
whose modules are already imported are visible. Directory mode narrows the
candidates with a DirectoryStrategy first, which imports the scanned files.
"""

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

from ..exceptions import ConfigurationError
from ..reflection import ClassRef, class_name, iter_declared_classes, load_class, type_name
from .base import DiscoveryStrategy, md5
from .directory import Directories, DirectoryStrategy

if TYPE_CHECKING:
    from ..factory import StrategyFactory

logger = logging.getLogger(__name__)


class SubtypeStrategy(DiscoveryStrategy):
    """Discovers subtypes of a target type."""

    # Metadata key holding the target name and cache key prefix
    metadata_key = ''

    def __init__(self, target: ClassRef, factory: Optional['StrategyFactory'] = None):
        self.target = type_name(target)
        self._target_ref = target
        self.factory = factory
        self.directory_strategy: Optional[DirectoryStrategy] = None

    def directories(self, directories: Directories) -> None:
        """Restrict discovery to classes declared under directories"""
        if self.factory is None:
            raise ConfigurationError(
                "Cannot use directories() without a StrategyFactory. "
                "Provide a factory or use global discovery mode.",
                strategy=self.name,
            )
        self.directory_strategy = self.factory.create_directory_strategy(directories)

    @abstractmethod
    def matches(self, cls: type, target: type) -> bool:
        """Whether cls is a subtype of target"""
        pass

    def _candidates(self) -> Iterator[Tuple[str, Optional[type]]]:
        if self.directory_strategy is not None:
            for name in self.directory_strategy.discover():
                yield name, load_class(name)
            return
        for cls in iter_declared_classes():
            if '<locals>' not in cls.__qualname__:
                yield class_name(cls), cls

    def discover(self) -> List[str]:
        target = load_class(self._target_ref)
        if target is None:
            logger.debug(f"Target type {self.target} cannot be loaded")
            return []

        classes: List[str] = []
        for name, cls in self._candidates():
            if cls is None or name in classes:
                continue
            try:
                if self.matches(cls, target):
                    classes.append(name)
            except Exception as e:
                logger.debug(f"Subtype check failed for {name}: {e}")
        return classes

    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        return {
            'class': identifier,
            self.metadata_key: self.target,
        }

    def get_cache_key(self) -> str:
        key = f"{self.metadata_key}:" + md5(self.target)
        if self.directory_strategy is not None:
            key += ":" + self.directory_strategy.get_cache_key()
        return key
