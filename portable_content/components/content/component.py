"""
Content component - turns raw requests into stored ContentItems.

Flow:
- create: validate (creation rules) -> build via factory -> repo.save
- update: load -> validate (update rules) -> apply sanitized fields -> repo.save
- list / delete: paged reads and removal straight through the repository

Only fully validated domain objects ever reach the repository. Validation
failures are returned as ValidationResult values, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from portable_content.components.validation import (
    ContentValidationService,
    ValidationResult,
)
from portable_content.domain.entities import ContentItem, build_content_item

from .ports import ContentFactoryPort, ContentRepoPort

logger = logging.getLogger(__name__)


class ContentService:
    """Content creation and update on top of the validation pipeline."""

    def __init__(
        self,
        repo: ContentRepoPort,
        validation: ContentValidationService,
        factory: ContentFactoryPort = build_content_item,
    ) -> None:
        """
        Initialize content service.

        Args:
            repo: Content repository
            validation: Sanitize-then-validate pipeline
            factory: Builds a ContentItem from sanitized fields
        """
        self._repo = repo
        self._validation = validation
        self._factory = factory

    def get(self, content_id: UUID) -> ContentItem | None:
        """Get content by ID."""
        return self._repo.get_by_id(content_id)

    def list(self, limit: int = 20, offset: int = 0) -> list[ContentItem]:
        """Page of content, newest first."""
        return self._repo.find_all(limit=limit, offset=offset)

    def delete(self, content_id: UUID) -> bool:
        """
        Delete content by ID.

        Returns:
            True if the content existed and was removed
        """
        if not self._repo.exists(content_id):
            return False
        self._repo.delete(content_id)
        logger.info("Deleted content %s", content_id)
        return True

    def create(
        self,
        data: Mapping[str, Any],
    ) -> tuple[ContentItem | None, ValidationResult]:
        """
        Create new content from a raw request.

        Returns:
            Tuple of (saved_content or None, validation result)
        """
        result = self._validation.validate_content_creation(data)
        if not result.is_valid():
            return None, result

        content = self._factory(result.get_data() or {})
        saved = self._repo.save(content)
        logger.info("Created content %s with %d block(s)", saved.id, len(saved.blocks))
        return saved, result

    def update(
        self,
        content_id: UUID,
        data: Mapping[str, Any],
    ) -> tuple[ContentItem | None, ValidationResult]:
        """
        Update fields present in a raw request; absent fields are kept.

        Returns:
            Tuple of (updated_content or None, validation result)
        """
        content = self._repo.get_by_id(content_id)
        if content is None:
            return None, ValidationResult.single_error(
                "id", f"Content {content_id} not found"
            )

        result = self._validation.validate_content_update(data)
        if not result.is_valid():
            return None, result

        updated = content.apply_update(result.get_data() or {})
        saved = self._repo.save(updated)
        logger.info("Updated content %s", saved.id)
        return saved, result
