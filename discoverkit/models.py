"""
Data models for discoverkit.

- TargetClass/TargetMethod/TargetProperty: entries of the attribute index
- WarmupReport: outcome of a cache warming run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class TargetClass:
    """A class decorated with an attribute"""
    attribute: Any
    name: str


@dataclass(frozen=True)
class TargetMethod:
    """A method decorated with an attribute"""
    attribute: Any
    class_name: str
    name: str

    @property
    def identifier(self) -> str:
        return f"{self.class_name}::{self.name}"


@dataclass(frozen=True)
class TargetProperty:
    """A property decorated with an attribute"""
    attribute: Any
    class_name: str
    name: str

    @property
    def identifier(self) -> str:
        return f"{self.class_name}::${self.name}"


def split_member(identifier: str) -> List[str]:
    """Split 'Class::member' or 'Class::$member' into [class, member]"""
    class_name, _, member = identifier.partition('::')
    return [class_name, member.lstrip('$')]


@dataclass
class WarmupReport:
    """Counters collected while warming the discovery cache"""
    total_paths: int = 0
    cached: int = 0
    skipped: int = 0
    failed: int = 0
    classes_discovered: int = 0
    failures: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, int]:
        return {
            'Total Paths': self.total_paths,
            'Cached': self.cached,
            'Skipped': self.skipped,
            'Failed': self.failed,
            'Classes Discovered': self.classes_discovered,
        }
