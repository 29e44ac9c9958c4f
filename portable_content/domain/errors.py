"""
Error taxonomy for the content pipeline.

- ConfigurationError: composition-time defect (duplicate kind, late registration).
- DataShapeError / MissingHandlerError: fail-fast sanitization failures.

Business-rule violations are never raised; they travel as ValidationResult values.
"""

from __future__ import annotations

from collections.abc import Iterable


class PortableContentError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(PortableContentError):
    """Raised when strategies are composed incorrectly."""


class SanitizationError(PortableContentError, ValueError):
    """Raised when input cannot be sanitized at all."""


class DataShapeError(SanitizationError):
    """Raised when the input structure is broken (not a map, no usable kind)."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        field: str | None = None,
    ) -> None:
        self.index = index
        self.field = field
        super().__init__(message)


class MissingHandlerError(SanitizationError):
    """Raised when a block declares a kind no strategy is registered for."""

    def __init__(
        self,
        kind: str,
        supported: Iterable[str] = (),
        *,
        role: str = "sanitizer",
    ) -> None:
        self.kind = kind
        self.supported = tuple(supported)
        msg = f"No {role} registered for block kind '{kind}'"
        if self.supported:
            msg += f" (supported: {', '.join(self.supported)})"
        super().__init__(msg)


class InvalidContentError(PortableContentError, ValueError):
    """Raised when a domain object is built from data that was not validated."""

    @classmethod
    def empty_type(cls) -> InvalidContentError:
        return cls("Content type cannot be empty")

    @classmethod
    def invalid_block_type(cls, block: object) -> InvalidContentError:
        return cls(f"Expected a content block, got {type(block).__name__}")

    @classmethod
    def unsupported_block(cls, kind: object) -> InvalidContentError:
        return cls(f"Cannot build block of kind '{kind}'")
