"""
Method strategy - finds methods decorated with an attribute.

Identifiers take the form ``package.module.Class::method``.
"""

import logging
from typing import Any, Dict, List, Optional

from ..attributes import AttributeIndex, AttributeRef
from ..exceptions import IndexUnavailableError
from ..models import split_member
from ..reflection import type_name
from .base import DiscoveryStrategy, md5

logger = logging.getLogger(__name__)


class MethodStrategy(DiscoveryStrategy):
    """Discovers methods carrying an attribute."""

    def __init__(self, attribute: AttributeRef, index: Optional[AttributeIndex] = None):
        self.attribute = type_name(attribute)
        self.index = index

    def discover(self) -> List[str]:
        if self.index is None:
            raise IndexUnavailableError(
                "An attribute index is required for method discovery",
                strategy=self.name,
            )

        try:
            return [target.identifier for target in self.index.find_target_methods(self.attribute)]
        except Exception as e:
            logger.warning(f"Method lookup failed for {self.attribute}: {e}")
            return []

    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        class_name, method_name = split_member(identifier)
        metadata = {
            'method': identifier,
            'class': class_name,
            'name': method_name,
            'attribute': None,
            'attribute_class': self.attribute,
        }

        if self.index is not None:
            try:
                for target in self.index.find_target_methods(self.attribute):
                    if target.class_name == class_name and target.name == method_name:
                        metadata['attribute'] = target.attribute
                        break
            except Exception as e:
                logger.debug(f"Could not attach attribute to {identifier}: {e}")

        return metadata

    def get_cache_key(self) -> str:
        return 'method:' + md5(self.attribute)
