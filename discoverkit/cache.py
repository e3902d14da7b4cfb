"""
File-based cache for discovery results.

One JSON file per key, named by the md5 of the key so arbitrary characters
are safe. Only identifier lists are stored; metadata is rebuilt on every
read. Writes go through a temp file and os.replace so readers never see a
partial file.
"""

import hashlib
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


class CacheManager:
    """Manages discovery result caching"""

    SUFFIX = '.json'

    def __init__(self, cache_path: Optional[Union[str, Path]] = None, enabled: bool = True,
                 ttl: Optional[float] = None):
        self.cache_path = Path(cache_path) if cache_path else Path.cwd() / '.cache' / 'discovery'
        self.enabled = enabled
        self.ttl = ttl

    def get(self, key: str) -> Optional[List[str]]:
        """
        Get cached identifiers for a key.

        Returns None when caching is disabled, the entry is missing, expired,
        or unreadable.
        """
        if not self.enabled:
            return None

        cache_file = self.get_cache_file(key)
        if not cache_file.is_file():
            return None

        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable discovery cache file {cache_file}: {e}")
            return None

        classes = data.get('classes') if isinstance(data, dict) else None
        if not isinstance(classes, list) or not all(isinstance(c, str) for c in classes):
            logger.warning(f"Ignoring malformed discovery cache file {cache_file}")
            return None

        if self.ttl is not None:
            generated_at = data.get('generated_at')
            if not isinstance(generated_at, (int, float)) or time.time() - generated_at > self.ttl:
                logger.debug(f"Discovery cache entry expired: {key}")
                return None

        return classes

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def put(self, key: str, classes: List[str]) -> None:
        """Store identifiers for a key. Failures are logged, never raised."""
        if not self.enabled:
            return

        cache_file = self.get_cache_file(key)
        payload = {
            'key': key,
            'generated_at': time.time(),
            'classes': list(classes),
        }

        tmp_name = None
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=cache_file.name + '.', suffix='.tmp',
                                            dir=str(cache_file.parent))
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_name, cache_file)
            tmp_name = None
            logger.debug(f"Cached {len(payload['classes'])} identifiers under {key}")
        except OSError as e:
            logger.error(f"Discovery cache write failed for {key}: {e}")
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def clear(self, key: Optional[str] = None) -> None:
        """Remove one cache entry, or every entry when key is None"""
        if key is not None:
            files = [self.get_cache_file(key)]
        elif self.cache_path.is_dir():
            files = sorted(self.cache_path.iterdir())
        else:
            files = []

        for cache_file in files:
            try:
                if cache_file.is_file():
                    cache_file.unlink()
            except OSError as e:
                logger.warning(f"Failed to delete discovery cache file {cache_file}: {e}")

    def keys(self) -> List[str]:
        """Keys of every readable cache entry"""
        if not self.cache_path.is_dir():
            return []
        keys = []
        for cache_file in sorted(self.cache_path.glob('*' + self.SUFFIX)):
            try:
                with open(cache_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError):
                continue
            if isinstance(data, dict) and isinstance(data.get('key'), str):
                keys.append(data['key'])
        return keys

    def get_cache_file(self, key: str) -> Path:
        """'settings-discovery' -> <cache_path>/<md5>.json"""
        hashed = hashlib.md5(key.encode('utf-8')).hexdigest()
        return self.cache_path / f"{hashed}{self.SUFFIX}"
