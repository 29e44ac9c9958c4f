"""
Validation component value types.

ValidationResult is the errors-as-values carrier for the whole pipeline.
FieldPath gives block-level errors a structured (scope, index, field) key.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# --- Field Paths ---


@dataclass(frozen=True)
class FieldPath:
    """
    Structured error key.

    ``FieldPath("blocks", 2, "source")`` renders as ``blocks.2.source``.
    """

    scope: str
    index: int | None = None
    field: str | None = None

    def __str__(self) -> str:
        parts = [self.scope]
        if self.index is not None:
            parts.append(str(self.index))
        if self.field is not None:
            parts.append(self.field)
        return ".".join(parts)

    def child(self, name: str) -> FieldPath:
        """Path to a subfield of this scope."""
        if self.field is not None:
            return FieldPath(self.scope, self.index, f"{self.field}.{name}")
        return FieldPath(self.scope, self.index, name)

    @classmethod
    def parse(cls, text: str) -> FieldPath:
        scope, _, rest = text.partition(".")
        if not rest:
            return cls(scope)
        head, _, tail = rest.partition(".")
        if head.isdigit():
            return cls(scope, int(head), tail or None)
        return cls(scope, None, rest)


FieldKey = str | FieldPath


def _key(name: FieldKey) -> str:
    return str(name)


# --- Validation Result ---


@dataclass(frozen=True)
class ValidationResult:
    """
    Immutable outcome of a validation step.

    ``valid`` is authoritative: a failure with no entries is still invalid.
    Errors are kept in insertion order, per field and across fields.
    Both ``errors`` and ``data`` are read-only views over private copies.
    """

    valid: bool
    errors: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    data: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        frozen = MappingProxyType({_key(k): tuple(v) for k, v in self.errors.items()})
        object.__setattr__(self, "errors", frozen)
        if self.data is not None:
            object.__setattr__(self, "data", MappingProxyType(copy.deepcopy(dict(self.data))))

    # --- Factories ---

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(True)

    @classmethod
    def success_with_data(cls, data: Mapping[str, Any]) -> ValidationResult:
        return cls(True, {}, data)

    @classmethod
    def failure(cls, errors: Mapping[FieldKey, Iterable[str]]) -> ValidationResult:
        return cls(False, {_key(k): tuple(v) for k, v in errors.items()})

    @classmethod
    def single_error(cls, field_name: FieldKey, message: str) -> ValidationResult:
        return cls(False, {_key(field_name): (message,)})

    # --- Queries ---

    def is_valid(self) -> bool:
        return self.valid

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_errors(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self.errors.items()}

    def get_data(self) -> dict[str, Any] | None:
        """A fresh copy of the sanitized data (None unless valid with data)."""
        if self.data is None:
            return None
        return copy.deepcopy(dict(self.data))

    def get_field_errors(self, field_name: FieldKey) -> list[str]:
        return list(self.errors.get(_key(field_name), ()))

    def has_field_errors(self, field_name: FieldKey) -> bool:
        return bool(self.errors.get(_key(field_name)))

    def get_error_count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())

    def get_fields_with_errors(self) -> list[str]:
        return list(self.errors)

    def get_all_messages(self) -> list[str]:
        return [
            f"{name}: {message}"
            for name, messages in self.errors.items()
            for message in messages
        ]

    # --- Composition ---

    def merge(self, other: ValidationResult) -> ValidationResult:
        """
        Combine two results.

        Valid only if both are valid. Per-field lists are concatenated left
        then right, duplicates kept.
        """
        if self.valid and other.valid:
            data = self.data if self.data is not None else other.data
            return ValidationResult(True, {}, data)

        merged: dict[str, tuple[str, ...]] = dict(self.errors)
        for name, messages in other.errors.items():
            merged[name] = merged.get(name, ()) + messages
        return ValidationResult(False, merged)

    def scoped(self, prefix: FieldPath) -> ValidationResult:
        """Re-key every field under ``prefix`` (``source`` -> ``blocks.2.source``)."""
        if self.valid:
            return self
        rekeyed = {str(prefix.child(name)): messages for name, messages in self.errors.items()}
        return ValidationResult(False, rekeyed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.valid,
            "errors": self.get_errors(),
            "error_count": self.get_error_count(),
            "fields_with_errors": self.get_fields_with_errors(),
        }


# --- Sanitization Statistics ---


@dataclass(frozen=True)
class SanitizationStats:
    """Counters describing how much a sanitize call changed its input."""

    fields_processed: int = 0
    fields_modified: int = 0
    blocks_processed: int = 0
    blocks_modified: int = 0
    total_content_length_before: int = 0
    total_content_length_after: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "fields_processed": self.fields_processed,
            "fields_modified": self.fields_modified,
            "blocks_processed": self.blocks_processed,
            "blocks_modified": self.blocks_modified,
            "total_content_length_before": self.total_content_length_before,
            "total_content_length_after": self.total_content_length_after,
        }


@dataclass(frozen=True)
class ProcessingDetails:
    """Diagnostic view of one pipeline run (monitoring, not the hot path)."""

    sanitized_data: Mapping[str, Any]
    sanitization_stats: SanitizationStats | None
    validation_result: ValidationResult
    final_result: ValidationResult

    def __post_init__(self) -> None:
        snapshot = MappingProxyType(copy.deepcopy(dict(self.sanitized_data)))
        object.__setattr__(self, "sanitized_data", snapshot)


# --- Input Models ---


@dataclass(frozen=True)
class ValidateCreationInput:
    """Input for validating a content creation request."""

    data: Mapping[str, Any]


@dataclass(frozen=True)
class ValidateUpdateInput:
    """Input for validating a content update request."""

    data: Mapping[str, Any]


@dataclass(frozen=True)
class ProcessDetailsInput:
    """Input for a diagnostic pipeline run."""

    data: Mapping[str, Any]
