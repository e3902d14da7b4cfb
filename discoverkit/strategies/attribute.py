"""
Attribute strategy - finds classes decorated with an attribute.
"""

import logging
from typing import Any, Dict, List, Optional

from ..attributes import AttributeIndex, AttributeRef
from ..models import TargetClass
from ..reflection import source_file, type_name
from .base import DiscoveryStrategy, md5

logger = logging.getLogger(__name__)


class AttributeStrategy(DiscoveryStrategy):
    """
    Discovers classes carrying an attribute.

    The raw index targets of the latest discover() call are kept so that
    get_metadata() can attach the attribute instance. They are replaced on
    every call.
    """

    def __init__(self, attribute: AttributeRef, index: Optional[AttributeIndex] = None):
        self.attribute = type_name(attribute)
        self.index = index
        self._targets: List[TargetClass] = []

    def discover(self) -> List[str]:
        self._targets = []
        if self.index is None:
            logger.debug(f"No attribute index available for {self.attribute}")
            return []

        try:
            self._targets = self.index.find_target_classes(self.attribute)
        except Exception as e:
            logger.warning(f"Attribute lookup failed for {self.attribute}: {e}")
            self._targets = []
            return []

        return [target.name for target in self._targets]

    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        target = next((t for t in self._targets if t.name == identifier), None)
        return {
            'class': identifier,
            'attribute': target.attribute if target else None,
            'file': source_file(identifier),
        }

    def get_cache_key(self) -> str:
        return 'attribute:' + md5(self.attribute)
