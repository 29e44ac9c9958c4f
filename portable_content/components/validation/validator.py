"""
Content validator - business rules over sanitized content.

Never short-circuits: every rule runs and every violation is recorded.

Field rules (limits come from ContentRules):
- type: required on create, non-empty, <= type.max, [A-Za-z0-9_] only
- title / summary: optional, <= max length
- blocks: required on create, count within blocks.min..blocks.max,
  each block checked by its kind's validator under blocks.<i>.<field>
- unknown top-level keys: reported under "general"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from portable_content.rules.models import ContentRules

from .models import FieldPath, ValidationResult
from .registry import ValidatorRegistry

logger = logging.getLogger(__name__)

GENERAL = "general"

_TYPE_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


class _Errors:
    """Ordered field -> messages accumulator."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, field_name: str | FieldPath, message: str) -> None:
        self._errors.setdefault(str(field_name), []).append(message)

    def result(self) -> ValidationResult:
        if self._errors:
            return ValidationResult.failure(self._errors)
        return ValidationResult.success()


class ContentValidator:
    """Top-level content validator (ContentValidatorPort)."""

    def __init__(
        self,
        block_validators: ValidatorRegistry,
        rules: ContentRules | None = None,
    ) -> None:
        self._blocks = block_validators
        self.rules = rules or ContentRules()

    @property
    def block_validators(self) -> ValidatorRegistry:
        return self._blocks

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate with creation rules."""
        return self.validate_creation(data)

    def validate_creation(self, data: Mapping[str, Any]) -> ValidationResult:
        return self._validate(data, creating=True)

    def validate_update(self, data: Mapping[str, Any]) -> ValidationResult:
        """Every field optional; rules apply only to fields that are present."""
        return self._validate(data, creating=False)

    def _validate(self, data: Mapping[str, Any], *, creating: bool) -> ValidationResult:
        errors = _Errors()

        self._check_allowed_fields(data, errors)
        self._check_type(data, errors, required=creating)
        self._check_text(data, "title", self.rules.title.max, errors)
        self._check_text(data, "summary", self.rules.summary.max, errors)
        result = errors.result()

        return result.merge(self._check_blocks(data, required=creating))

    def _check_allowed_fields(self, data: Mapping[str, Any], errors: _Errors) -> None:
        allowed = self.rules.allowed_fields
        for key in data:
            if key not in allowed:
                errors.add(GENERAL, f"Field '{key}' is not allowed")

    def _check_type(self, data: Mapping[str, Any], errors: _Errors, *, required: bool) -> None:
        if data.get("type") is None:
            if required:
                errors.add("type", "Type is required")
            return

        value = data["type"]
        if not isinstance(value, str):
            errors.add("type", "Type must be a string")
            return
        if not value:
            errors.add("type", "Type is required" if required else "Type cannot be empty")
            return

        max_length = self.rules.type.max
        if len(value) > max_length:
            errors.add("type", f"Type must be {max_length} characters or less")
        if not _TYPE_PATTERN.match(value):
            errors.add("type", "Type must contain only letters, numbers, and underscores")

    def _check_text(
        self,
        data: Mapping[str, Any],
        name: str,
        max_length: int,
        errors: _Errors,
    ) -> None:
        value = data.get(name)
        if value is None:
            return
        label = name.capitalize()
        if not isinstance(value, str):
            errors.add(name, f"{label} must be a string")
        elif len(value) > max_length:
            errors.add(name, f"{label} must be {max_length} characters or less")

    def _check_blocks(self, data: Mapping[str, Any], *, required: bool) -> ValidationResult:
        errors = _Errors()
        blocks = data.get("blocks")

        if blocks is None:
            if required:
                errors.add("blocks", "At least one block is required")
            return errors.result()

        if not isinstance(blocks, list | tuple):
            errors.add("blocks", "Blocks must be a list")
            return errors.result()

        limits = self.rules.blocks
        if len(blocks) < limits.min:
            if limits.min == 1:
                errors.add("blocks", "At least one block is required")
            else:
                errors.add("blocks", f"At least {limits.min} blocks are required")
        if len(blocks) > limits.max:
            errors.add("blocks", f"Maximum {limits.max} blocks allowed")

        result = errors.result()
        for index, block in enumerate(blocks):
            result = result.merge(self._check_block(block, index))
        return result

    def _check_block(self, block: Any, index: int) -> ValidationResult:
        path = FieldPath("blocks", index)

        if not isinstance(block, Mapping):
            return ValidationResult.single_error(path, "Block must be a mapping")

        kind = block.get("kind")
        if not isinstance(kind, str) or not kind.strip():
            return ValidationResult.single_error(path.child("kind"), "Block kind is required")

        if kind not in self._blocks:
            # The sanitizer should already have rejected this kind
            logger.warning("No block validator for kind %r at %s", kind, path)
            return ValidationResult.single_error(
                GENERAL,
                f"Block {index}: no validator registered for block kind '{kind}'",
            )

        return self._blocks.validate_block(block, index)
