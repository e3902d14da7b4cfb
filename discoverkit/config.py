"""
Configuration loading for discoverkit.

Configuration lives in a YAML file (see config/discovery.yaml):

    base_path: .
    cache:
      enabled: true
      path: .cache/discovery
      ttl: null            # seconds, null = never expires
    monorepo:
      packages: {path: 'packages/*', namespace: '{package}'}
      modules:  {path: 'modules/*', namespace: 'modules.{module}'}
      app:      {path: 'app', namespace: 'app'}
    paths:
      settings: ['packages/*/src/settings', 'app/settings']

Lookup order: explicit path, $DISCOVERY_CONFIG, ./discovery.yaml, defaults.
$DISCOVERY_CACHE_ENABLED overrides cache.enabled.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV = 'DISCOVERY_CONFIG'
CACHE_ENABLED_ENV = 'DISCOVERY_CACHE_ENABLED'
DEFAULT_CONFIG_FILE = 'discovery.yaml'

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


@dataclass
class CacheConfig:
    """Cache settings"""
    enabled: bool = True
    path: Optional[str] = None
    ttl: Optional[float] = None


@dataclass
class NamespaceTemplate:
    """Directory glob and namespace template for one monorepo layout"""
    path: str
    namespace: str

    @property
    def directory(self) -> str:
        """'packages/*' -> 'packages'"""
        return self.path.split('/')[0]


@dataclass
class MonorepoConfig:
    """Namespace resolution templates"""
    packages: NamespaceTemplate = field(default_factory=lambda: NamespaceTemplate('packages/*', '{package}'))
    modules: NamespaceTemplate = field(default_factory=lambda: NamespaceTemplate('modules/*', 'modules.{module}'))
    app: NamespaceTemplate = field(default_factory=lambda: NamespaceTemplate('app', 'app'))


@dataclass
class DiscoveryConfig:
    """Complete discoverkit configuration"""
    base_path: Path = field(default_factory=Path.cwd)
    cache: CacheConfig = field(default_factory=CacheConfig)
    monorepo: MonorepoConfig = field(default_factory=MonorepoConfig)
    paths: Dict[str, List[str]] = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def cache_path(self) -> Path:
        """Absolute cache directory"""
        if not self.cache.path:
            return self.base_path / '.cache' / 'discovery'
        path = Path(self.cache.path)
        return path if path.is_absolute() else self.base_path / path

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'DiscoveryConfig':
        """Build a config from parsed YAML data"""
        if not isinstance(data, dict):
            raise ConfigurationError("Discovery configuration must be a mapping")

        base_dir = base_dir or Path.cwd()
        base_path = Path(data.get('base_path') or base_dir)
        if not base_path.is_absolute():
            base_path = (base_dir / base_path).resolve()

        return cls(
            base_path=base_path,
            cache=_parse_cache(data.get('cache') or {}),
            monorepo=_parse_monorepo(data.get('monorepo') or {}),
            paths=_parse_paths(data.get('paths') or {}),
        )


def _parse_cache(raw: Any) -> CacheConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("'cache' must be a mapping")
    ttl = raw.get('ttl')
    if ttl is not None and (isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or ttl < 0):
        raise ConfigurationError(f"'cache.ttl' must be a non-negative number or null, got {ttl!r}")
    return CacheConfig(
        enabled=_parse_bool(raw.get('enabled', True), 'cache.enabled'),
        path=raw.get('path'),
        ttl=ttl,
    )


def _parse_monorepo(raw: Any) -> MonorepoConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("'monorepo' must be a mapping")
    config = MonorepoConfig()
    for name in ('packages', 'modules', 'app'):
        section = raw.get(name)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ConfigurationError(f"'monorepo.{name}' must be a mapping")
        default = getattr(config, name)
        setattr(config, name, NamespaceTemplate(
            path=str(section.get('path', default.path)),
            namespace=str(section.get('namespace', default.namespace)),
        ))
    return config


def _parse_paths(raw: Any) -> Dict[str, List[str]]:
    if not isinstance(raw, dict):
        raise ConfigurationError("'paths' must be a mapping of name to directories")
    paths = {}
    for name, directories in raw.items():
        if isinstance(directories, str):
            directories = [directories]
        if not isinstance(directories, list):
            raise ConfigurationError(f"'paths.{name}' must be a directory or a list of directories")
        paths[str(name)] = [str(d) for d in directories]
    return paths


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ConfigurationError(f"'{name}' must be a boolean, got {value!r}")


def find_config_file(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Locate the configuration file to load, if any"""
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    if default.exists():
        return default
    return None


def load_config(path: Optional[Union[str, Path]] = None) -> DiscoveryConfig:
    """
    Load the discovery configuration.

    Args:
        path: Explicit YAML file; falls back to $DISCOVERY_CONFIG and ./discovery.yaml

    Returns:
        DiscoveryConfig (defaults when no file is found)

    Raises:
        ConfigurationError: when the file is missing, unparsable or malformed
    """
    config_file = find_config_file(path)

    if config_file is None:
        logger.debug("No discovery configuration file found, using defaults")
        config = DiscoveryConfig()
    else:
        if not config_file.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_file}: {e}") from e
        config = DiscoveryConfig.from_dict(data, base_dir=config_file.resolve().parent)
        config.source = config_file
        logger.info(f"Loaded discovery configuration from {config_file}")

    override = os.environ.get(CACHE_ENABLED_ENV)
    if override is not None and override.strip():
        config.cache.enabled = _parse_bool(override, CACHE_ENABLED_ENV)

    return config
