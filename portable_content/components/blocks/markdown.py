"""
Markdown block strategies.

Sanitizer:
- control characters removed, LF line endings
- trailing whitespace stripped per line, blank-line runs limited to one
- single space after heading hashes and list markers
- whole source trimmed; extra block fields passed through

Validator:
- source required, non-empty after trim, bounded length
- no <script> tags, encodable as UTF-8
- balanced ``` fences, link targets http(s) / root-relative / anchor
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from portable_content.components.validation.models import ValidationResult
from portable_content.domain.errors import DataShapeError
from portable_content.domain.sanitize import (
    collapse_newlines,
    is_scalar,
    normalize_line_endings,
    strip_control_chars,
)
from portable_content.rules.models import MarkdownBlockRules

KIND = "markdown"

_HEADING_SPACING = re.compile(r"^(#{1,6})[ \t]+", re.MULTILINE)
_BULLET_SPACING = re.compile(r"^([ \t]*[-*+])[ \t]+", re.MULTILINE)
_NUMBERED_SPACING = re.compile(r"^([ \t]*\d+\.)[ \t]+", re.MULTILINE)

_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_UNSAFE_LINK = re.compile(r"\[[^\]]*\]\((?!https?://|/|#)[^)]*\)")
_CODE_FENCE = "```"


class MarkdownBlockSanitizer:
    """Cleans markdown block source."""

    def kind(self) -> str:
        return KIND

    def sanitize(self, block: Mapping[str, Any]) -> dict[str, Any]:
        sanitized: dict[str, Any] = {"kind": str(block.get("kind", KIND)).strip()}

        source = block.get("source")
        if source is not None:
            if not is_scalar(source):
                raise DataShapeError(
                    f"Markdown block source must be text, got {type(source).__name__}",
                    field="source",
                )
            sanitized["source"] = sanitize_markdown_source(str(source))

        # Extra fields pass through as-is
        for key, value in block.items():
            if key not in sanitized and key != "source":
                sanitized[key] = value

        return sanitized


def sanitize_markdown_source(source: str) -> str:
    text = normalize_line_endings(strip_control_chars(source))
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    # Trim first so a leading indent cannot hide the first line's marker
    text = collapse_newlines(text).strip()
    text = _HEADING_SPACING.sub(r"\1 ", text)
    text = _BULLET_SPACING.sub(r"\1 ", text)
    text = _NUMBERED_SPACING.sub(r"\1 ", text)
    return text.strip()


class MarkdownBlockValidator:
    """Checks markdown block rules; errors keyed by block field name."""

    def __init__(self, rules: MarkdownBlockRules | None = None) -> None:
        self.rules = rules or MarkdownBlockRules()

    def kind(self) -> str:
        return KIND

    def validate(self, block: Mapping[str, Any]) -> ValidationResult:
        errors: dict[str, list[str]] = {}

        if block.get("kind") is None:
            errors.setdefault("kind", []).append("Block kind is required")
        elif block.get("kind") != KIND:
            errors.setdefault("kind", []).append("This validator only handles markdown blocks")

        if block.get("source") is None:
            errors.setdefault("source", []).append("Block source is required")
        elif not isinstance(block["source"], str):
            errors.setdefault("source", []).append("Block source must be a string")
        else:
            source_errors = self._validate_source(block["source"])
            if source_errors:
                errors["source"] = source_errors

        return ValidationResult.failure(errors) if errors else ValidationResult.success()

    def _validate_source(self, source: str) -> list[str]:
        errors: list[str] = []
        max_length = self.rules.max_source_length

        if not source.strip():
            errors.append("Block source cannot be empty after trimming")

        if len(source) > max_length:
            errors.append(
                f"Block source cannot exceed {max_length} characters (got {len(source)})"
            )

        if _SCRIPT_TAG.search(source):
            errors.append("Script tags are not allowed in markdown content")

        try:
            source.encode("utf-8")
        except UnicodeEncodeError:
            errors.append("Content must be valid UTF-8 encoded text")

        if self.rules.check_code_fences and source.count(_CODE_FENCE) % 2:
            errors.append("Unbalanced code blocks (``` markers)")

        if self.rules.check_link_targets and _UNSAFE_LINK.search(source):
            errors.append("Links must use valid URLs or relative paths")

        return errors
