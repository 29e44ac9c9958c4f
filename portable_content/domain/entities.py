from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from portable_content.domain.errors import InvalidContentError

# --- Enums / Literals ---
BlockKind = Literal["markdown"]


def _now() -> datetime:
    return datetime.now(UTC)


# --- Blocks ---

class MarkdownBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    kind: BlockKind = "markdown"
    source: str
    created_at: datetime = Field(default_factory=_now)

    def is_empty(self) -> bool:
        return not self.source.strip()

    def word_count(self) -> int:
        return len(self.source.split())


ContentBlock = MarkdownBlock

# --- Content ---

class ContentItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    type: str
    title: str | None = None
    summary: str | None = None
    blocks: list[ContentBlock] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def apply_update(self, sanitized: Mapping[str, Any]) -> ContentItem:
        """Return a copy with every field present in ``sanitized`` replaced."""
        changes: dict[str, Any] = {"updated_at": _now()}
        for name in ("type", "title", "summary"):
            if name in sanitized:
                changes[name] = sanitized[name]
        if "blocks" in sanitized:
            changes["blocks"] = [build_block(b) for b in sanitized["blocks"]]
        if not str(changes.get("type", self.type)).strip():
            raise InvalidContentError.empty_type()
        return self.model_copy(update=changes)

    def with_title(self, title: str | None) -> ContentItem:
        return self.model_copy(update={"title": title, "updated_at": _now()})

    def with_blocks(self, blocks: Iterable[ContentBlock]) -> ContentItem:
        """Return a copy holding exactly ``blocks``, in order."""
        blocks = list(blocks)
        for block in blocks:
            if not isinstance(block, MarkdownBlock):
                raise InvalidContentError.invalid_block_type(block)
        return self.model_copy(update={"blocks": blocks, "updated_at": _now()})

    def add_block(self, block: ContentBlock) -> ContentItem:
        return self.with_blocks([*self.blocks, block])


# --- Factory ---

BLOCK_BUILDERS: dict[str, Callable[[Mapping[str, Any]], ContentBlock]] = {
    "markdown": lambda data: MarkdownBlock(source=data["source"]),
}


def build_block(data: Mapping[str, Any]) -> ContentBlock:
    builder = BLOCK_BUILDERS.get(data.get("kind", ""))
    if builder is None:
        raise InvalidContentError.unsupported_block(data.get("kind"))
    return builder(data)


def build_content_item(sanitized: Mapping[str, Any]) -> ContentItem:
    """
    Build a ContentItem from sanitized, validated fields.

    Raises:
        InvalidContentError: If the data skipped the pipeline (empty type,
            block kind with no builder).
    """
    content_type = sanitized.get("type", "")
    if not isinstance(content_type, str) or not content_type.strip():
        raise InvalidContentError.empty_type()

    return ContentItem(
        type=content_type,
        title=sanitized.get("title"),
        summary=sanitized.get("summary"),
        blocks=[build_block(b) for b in sanitized.get("blocks", [])],
    )
