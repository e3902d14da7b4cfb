"""
Property strategy - finds properties decorated with an attribute.

Identifiers take the form ``package.module.Class::$property``.
"""

import logging
from typing import Any, Dict, List, Optional

from ..attributes import AttributeIndex, AttributeRef
from ..exceptions import IndexUnavailableError
from ..models import split_member
from ..reflection import type_name
from .base import DiscoveryStrategy, md5

logger = logging.getLogger(__name__)


class PropertyStrategy(DiscoveryStrategy):
    """Discovers properties carrying an attribute."""

    def __init__(self, attribute: AttributeRef, index: Optional[AttributeIndex] = None):
        self.attribute = type_name(attribute)
        self.index = index

    def discover(self) -> List[str]:
        if self.index is None:
            raise IndexUnavailableError(
                "An attribute index is required for property discovery",
                strategy=self.name,
            )

        try:
            return [target.identifier for target in self.index.find_target_properties(self.attribute)]
        except Exception as e:
            logger.warning(f"Property lookup failed for {self.attribute}: {e}")
            return []

    def get_metadata(self, identifier: str) -> Dict[str, Any]:
        class_name, property_name = split_member(identifier)
        metadata = {
            'property': identifier,
            'class': class_name,
            'name': property_name,
            'attribute': None,
            'attribute_class': self.attribute,
        }

        if self.index is not None:
            try:
                for target in self.index.find_target_properties(self.attribute):
                    if target.class_name == class_name and target.name == property_name:
                        metadata['attribute'] = target.attribute
                        break
            except Exception as e:
                logger.debug(f"Could not attach attribute to {identifier}: {e}")

        return metadata

    def get_cache_key(self) -> str:
        return 'property:' + md5(self.attribute)
