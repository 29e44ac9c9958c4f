"""
Content component - validated creation and update of content items.
"""

from .component import ContentService
from .ports import ContentFactoryPort, ContentRepoPort

__all__ = [
    "ContentService",
    # Ports
    "ContentFactoryPort",
    "ContentRepoPort",
]
