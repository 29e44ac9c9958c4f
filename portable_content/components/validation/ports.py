"""
Validation component port definitions.

Block strategies are plain objects satisfying these protocols; each declares
the single kind it handles.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .models import SanitizationStats, ValidationResult


class BlockSanitizerPort(Protocol):
    """Kind-specific block cleaning."""

    def kind(self) -> str:
        """The block kind token this strategy handles."""
        ...

    def sanitize(self, block: Mapping[str, Any]) -> dict[str, Any]:
        """
        Clean one block.

        Raises DataShapeError if a kind-specific field has an unusable shape.
        """
        ...


class BlockValidatorPort(Protocol):
    """Kind-specific block rule checking."""

    def kind(self) -> str:
        """The block kind token this strategy handles."""
        ...

    def validate(self, block: Mapping[str, Any]) -> ValidationResult:
        """Check one sanitized block; field keys are relative to the block."""
        ...


class ContentSanitizerPort(Protocol):
    """Top-level content cleaning."""

    def sanitize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Raises SanitizationError when the input cannot be cleaned."""
        ...

    def get_sanitization_stats(
        self,
        original: Mapping[str, Any],
        sanitized: Mapping[str, Any],
    ) -> SanitizationStats:
        ...


class ContentValidatorPort(Protocol):
    """Top-level content rule checking."""

    def validate_creation(self, data: Mapping[str, Any]) -> ValidationResult:
        ...

    def validate_update(self, data: Mapping[str, Any]) -> ValidationResult:
        ...
