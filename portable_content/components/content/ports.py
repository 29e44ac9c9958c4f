"""
Content component port definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
from uuid import UUID

from portable_content.domain.entities import ContentItem


class ContentRepoPort(Protocol):
    """Repository interface for content persistence."""

    def get_by_id(self, item_id: UUID) -> ContentItem | None:
        """Get content by ID."""
        ...

    def save(self, content: ContentItem) -> ContentItem:
        """Save or update content together with its blocks."""
        ...

    def find_all(self, limit: int = 20, offset: int = 0) -> list[ContentItem]:
        """Page of content, newest first."""
        ...

    def delete(self, item_id: UUID) -> None:
        """Delete content and its blocks; unknown ids are ignored."""
        ...

    def exists(self, item_id: UUID) -> bool:
        ...

    def count(self) -> int:
        ...


class ContentFactoryPort(Protocol):
    """Builds a domain object from sanitized, validated fields."""

    def __call__(self, sanitized: Mapping[str, Any]) -> ContentItem:
        ...
