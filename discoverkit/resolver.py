"""
Namespace resolver - converts source file paths into dotted module names.

Without a custom pattern the usual monorepo shapes are tried in order:

    .../packages/{package}/src/{rest}.py  ->  <packages namespace>.{rest}
    .../modules/{module}/src/{rest}.py    ->  <modules namespace>.{rest}
    .../app/{rest}.py                     ->  <app namespace>.{rest}

A custom pattern may use the placeholders {package}, {module}, {class}
(file stem) and {namespace} (dotted directories between src/ and the file).
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r'\{[a-z]+\}')


def _dotted(relative: str) -> str:
    """'cards/dashboard' -> 'cards.dashboard'"""
    return '.'.join(part for part in relative.split('/') if part)


def _join(*parts: str) -> str:
    return '.'.join(part for part in parts if part)


def _is_valid_name(name: Optional[str]) -> bool:
    return bool(name) and all(part.isidentifier() for part in name.split('.'))


class NamespaceResolver:
    """Resolves a file to the dotted name of the module it defines"""

    def __init__(self,
                 packages_namespace: str = '{package}',
                 modules_namespace: str = 'modules.{module}',
                 app_namespace: str = 'app',
                 packages_dir: str = 'packages',
                 modules_dir: str = 'modules',
                 app_dir: str = 'app'):
        self.packages_namespace = packages_namespace
        self.modules_namespace = modules_namespace
        self.app_namespace = app_namespace
        self.packages_dir = packages_dir
        self.modules_dir = modules_dir
        self.app_dir = app_dir

    def resolve_from_file(self, file: Union[str, Path], pattern: Optional[str] = None) -> Optional[str]:
        """
        Resolve a source file to a dotted module name.

        Args:
            file: Path to a .py file
            pattern: Optional custom pattern with placeholders

        Returns:
            Dotted name, or None when the path cannot be resolved
        """
        try:
            module_path = self._module_path(Path(file))
            if pattern is not None:
                name = self._resolve_with_pattern(module_path, pattern)
            else:
                name = self._resolve_monorepo_pattern(module_path)
        except Exception as e:
            logger.debug(f"Failed to resolve namespace for {file}: {e}")
            return None

        return name if _is_valid_name(name) else None

    @staticmethod
    def _module_path(file: Path) -> str:
        """Absolute posix path without the .py suffix; packages map to their directory"""
        path = file.resolve()
        if path.suffix != '.py':
            raise ValueError(f"Not a Python source file: {file}")
        if path.stem == '__init__':
            return path.parent.as_posix()
        return path.with_suffix('').as_posix()

    def _resolve_with_pattern(self, module_path: str, pattern: str) -> Optional[str]:
        """Substitute placeholders in a custom pattern"""
        package = re.search(rf'.*/{re.escape(self.packages_dir)}/([^/]+)/', module_path)
        if package:
            pattern = pattern.replace('{package}', package.group(1))

        module = re.search(rf'.*/{re.escape(self.modules_dir)}/([^/]+)/', module_path)
        if module:
            pattern = pattern.replace('{module}', module.group(1))

        stem = module_path.rsplit('/', 1)[-1]
        pattern = pattern.replace('{class}', stem)

        namespace = re.search(rf'/src/(.+)/{re.escape(stem)}$', module_path)
        if namespace:
            pattern = pattern.replace('{namespace}', _dotted(namespace.group(1)))
        else:
            pattern = pattern.replace('{namespace}.', '').replace('.{namespace}', '').replace('{namespace}', '')

        if PLACEHOLDER_RE.search(pattern):
            return None
        return pattern

    def _resolve_monorepo_pattern(self, module_path: str) -> Optional[str]:
        """Try the packages, modules and app conventions in order"""
        match = re.search(rf'.*/{re.escape(self.packages_dir)}/([^/]+)/src/(.+)$', module_path)
        if match:
            prefix = self.packages_namespace.replace('{package}', match.group(1))
            return _join(prefix, _dotted(match.group(2)))

        match = re.search(rf'.*/{re.escape(self.modules_dir)}/([^/]+)/src/(.+)$', module_path)
        if match:
            prefix = self.modules_namespace.replace('{module}', match.group(1))
            return _join(prefix, _dotted(match.group(2)))

        match = re.search(rf'.*/{re.escape(self.app_dir)}(/.+)?$', module_path)
        if match:
            return _join(self.app_namespace, _dotted(match.group(1) or ''))

        return None
