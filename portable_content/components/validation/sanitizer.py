"""
Content sanitizer - cleans top-level fields and delegates blocks by kind.

Sanitization normalizes representation only; it never judges business rules.
Structural breakage aborts the whole call (no partial output).

Per-field rules:
- type: scalar -> str, trimmed, only [A-Za-z0-9_] kept
- title: control chars removed, whitespace runs collapsed, empty -> omitted
- summary: control chars removed, LF line endings, 3+ newlines -> 2, empty -> omitted
- blocks: must be a list of mappings, each cleaned by its kind's strategy
- anything else: passed through untouched (closed schema is enforced by validation)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from portable_content.domain.errors import DataShapeError
from portable_content.domain.sanitize import (
    clean_paragraphs,
    clean_single_line,
    clean_token,
    is_scalar,
)

from .models import SanitizationStats
from .registry import SanitizerRegistry

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("type", "title", "summary")


class ContentSanitizer:
    """Top-level content sanitizer (ContentSanitizerPort)."""

    def __init__(self, block_sanitizers: SanitizerRegistry) -> None:
        self._blocks = block_sanitizers

    @property
    def block_sanitizers(self) -> SanitizerRegistry:
        return self._blocks

    def sanitize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Sanitize a raw content request.

        Absent and None-valued fields are omitted from the output.

        Raises:
            DataShapeError: If ``data`` or ``blocks`` is malformed.
            MissingHandlerError: If a block kind has no registered sanitizer.
        """
        if not isinstance(data, Mapping):
            raise DataShapeError(
                f"Content data must be a mapping, got {type(data).__name__}"
            )

        sanitized: dict[str, Any] = {}

        for key, value in data.items():
            if key in TEXT_FIELDS or key == "blocks":
                if value is None:
                    continue
                cleaned = self._sanitize_field(key, value)
                if cleaned is not None:
                    sanitized[key] = cleaned
            else:
                sanitized[key] = value

        return sanitized

    def _sanitize_field(self, key: str, value: Any) -> Any:
        if key == "type":
            return clean_token(value)
        if key == "title":
            return clean_single_line(value)
        if key == "summary":
            return clean_paragraphs(value)
        return self._sanitize_blocks(value)

    def _sanitize_blocks(self, blocks: Any) -> list[dict[str, Any]]:
        if not isinstance(blocks, list | tuple):
            raise DataShapeError(
                f"Blocks must be a list, got {type(blocks).__name__}",
                field="blocks",
            )

        # Non-mapping entries are rejected by index in the registry
        return self._blocks.sanitize_blocks(blocks)

    def get_sanitization_stats(
        self,
        original: Mapping[str, Any],
        sanitized: Mapping[str, Any],
    ) -> SanitizationStats:
        """Count processed/modified fields and blocks and content length change."""
        fields_processed = 0
        fields_modified = 0
        length_before = 0
        length_after = 0

        for name in TEXT_FIELDS:
            if original.get(name) is None:
                continue
            fields_processed += 1
            before = _as_text(original[name])
            after = _as_text(sanitized.get(name, ""))
            if before != after:
                fields_modified += 1
            length_before += len(before)
            length_after += len(after)

        blocks_processed = 0
        blocks_modified = 0
        original_blocks = original.get("blocks")
        sanitized_blocks = sanitized.get("blocks")

        if isinstance(original_blocks, list | tuple):
            blocks_processed = len(original_blocks)

            if isinstance(sanitized_blocks, list):
                if len(original_blocks) != len(sanitized_blocks):
                    blocks_modified += 1

                for before_block, after_block in zip(original_blocks, sanitized_blocks):
                    before = _block_source(before_block)
                    after = _block_source(after_block)
                    if before != after:
                        blocks_modified += 1
                    length_before += len(before)
                    length_after += len(after)

        stats = SanitizationStats(
            fields_processed=fields_processed,
            fields_modified=fields_modified,
            blocks_processed=blocks_processed,
            blocks_modified=blocks_modified,
            total_content_length_before=length_before,
            total_content_length_after=length_after,
        )
        logger.debug("Sanitization stats: %s", stats.to_dict())
        return stats


def _as_text(value: Any) -> str:
    return str(value) if is_scalar(value) else ""


def _block_source(block: Any) -> str:
    if isinstance(block, Mapping):
        return _as_text(block.get("source"))
    return ""
