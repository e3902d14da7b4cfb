"""
Directory strategy - finds classes declared in Python files under directories.

Each file is mapped to a module name by the NamespaceResolver, the module is
imported, and every class defined in it becomes an identifier. Files that
cannot be resolved or imported are skipped.
"""

import glob
import importlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..attributes import AttributeIndex
from ..reflection import classes_defined_in, source_file
from ..resolver import NamespaceResolver
from .base import DiscoveryStrategy, md5

logger = logging.getLogger(__name__)

Directories = Union[str, Path, Iterable[Union[str, Path]]]


def normalize_directories(directories: Directories) -> List[str]:
    if isinstance(directories, (str, Path)):
        return [str(directories)]
    return [str(d) for d in directories]


def expand_directories(directories: Iterable[str], base_path: Path) -> List[str]:
    """
    Anchor relative entries at base_path, expand glob patterns and keep
    existing directories only.

    'packages/*/src/Settings' -> ['<base>/packages/billing/src/Settings', ...]
    """
    expanded: List[str] = []
    for directory in directories:
        path = directory if os.path.isabs(directory) else str(base_path / directory)
        if any(ch in path for ch in '*?['):
            expanded.extend(sorted(glob.glob(path)))
        else:
            expanded.append(path)

    result = []
    for path in expanded:
        if os.path.isdir(path) and path not in result:
            result.append(path)
    return result


class DirectoryStrategy(DiscoveryStrategy):
    """Discovers classes by scanning directories of Python source files."""

    # Directories to skip
    SKIP_DIRS = {
        '.git', '.svn', '.hg', '__pycache__', 'node_modules',
        '.idea', '.vscode', '.mypy_cache', '.pytest_cache', '.tox',
        'venv', '.venv', 'env', 'build', 'dist',
    }

    def __init__(self, directories: Directories, resolver: NamespaceResolver,
                 base_path: Optional[Union[str, Path]] = None,
                 index: Optional[AttributeIndex] = None):
        self.directories = normalize_directories(directories)
        self.resolver = resolver
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.index = index
        self.namespace_pattern: Optional[str] = None

    def set_directories(self, directories: Directories) -> None:
        self.directories = normalize_directories(directories)

    def set_namespace_pattern(self, pattern: str) -> None:
        self.namespace_pattern = pattern

    def get_directories(self) -> List[str]:
        """Expanded, existing directories"""
        return expand_directories(self.directories, self.base_path)

    def discover(self) -> List[str]:
        expanded = self.get_directories()
        if not expanded:
            logger.debug(f"No directories matched {self.directories}")
            return []

        classes: List[str] = []
        for filepath in self._collect_files(expanded):
            module_name = self.resolver.resolve_from_file(filepath, self.namespace_pattern)
            if module_name is None:
                logger.debug(f"Could not resolve a module name for {filepath}")
                continue

            module = self._import(module_name, filepath)
            if module is None:
                continue

            for name in classes_defined_in(module):
                if name not in classes:
                    classes.append(name)

        logger.info(f"Discovered {len(classes)} classes in {len(expanded)} directories")
        return classes

    def _collect_files(self, directories: List[str]) -> List[Path]:
        """Collect all Python files under the directories"""
        files = []
        for directory in directories:
            for root, dirs, filenames in os.walk(directory):
                dirs[:] = sorted(d for d in dirs if d not in self.SKIP_DIRS)
                root_path = Path(root)
                for filename in sorted(filenames):
                    if filename.endswith('.py'):
                        files.append(root_path / filename)
        return files

    @staticmethod
    def _import(module_name: str, filepath: Path) -> Any:
        """Import a module and confirm it was loaded from filepath"""
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            logger.warning(f"Failed to import {module_name} from {filepath}: {e}")
            return None

        module_file = getattr(module, '__file__', None)
        if module_file is None:
            return None
        loaded = Path(module_file).resolve()
        expected = filepath.resolve()
        if loaded != expected:
            logger.debug(f"{module_name} resolves to {loaded}, not {expected}")
            return None
        return module

    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        attributes = self.index.attributes_of(identifier) if self.index is not None else []
        return {
            'class': identifier,
            'file': source_file(identifier),
            'attribute': attributes[0] if attributes else None,
            'attributes': attributes,
        }

    def get_cache_key(self) -> str:
        return 'directory:' + md5(json.dumps(self.directories))
