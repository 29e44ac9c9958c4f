"""
In-memory content repository (ContentRepoPort implementation).

Used for local development and testing; keeps items in a dict keyed by id.
Production storage lives outside this package.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from uuid import UUID

from portable_content.domain.entities import ContentItem

logger = logging.getLogger(__name__)


@dataclass
class InMemoryContentRepo:
    """Dict-backed repository; a lock keeps each write atomic."""

    _items: dict[UUID, ContentItem] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_by_id(self, item_id: UUID) -> ContentItem | None:
        return self._items.get(item_id)

    def save(self, content: ContentItem) -> ContentItem:
        with self._lock:
            self._items[content.id] = content
        logger.debug("Stored content %s", content.id)
        return content

    def find_all(self, limit: int = 20, offset: int = 0) -> list[ContentItem]:
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")
        with self._lock:
            items = sorted(self._items.values(), key=lambda c: c.created_at, reverse=True)
        return items[offset:offset + limit]

    def delete(self, item_id: UUID) -> None:
        with self._lock:
            removed = self._items.pop(item_id, None)
        if removed is not None:
            logger.debug("Deleted content %s", item_id)

    def exists(self, item_id: UUID) -> bool:
        return item_id in self._items

    def count(self) -> int:
        return len(self._items)
