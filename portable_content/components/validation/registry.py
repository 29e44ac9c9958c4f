"""
Strategy registries keyed by block kind.

A registry is filled once during composition and then sealed; after that it
is a read-only lookup table safe to share between callers without locking.

Invariants:
- At most one strategy per kind (duplicate is a ConfigurationError)
- No registration after seal()
- Unknown kinds never pass through sanitization (MissingHandlerError)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Generic, Protocol, Self, TypeVar

from portable_content.domain.errors import (
    ConfigurationError,
    DataShapeError,
    MissingHandlerError,
)
from portable_content.domain.sanitize import normalize_kind

from .models import FieldPath, ValidationResult
from .ports import BlockSanitizerPort, BlockValidatorPort

logger = logging.getLogger(__name__)


class _KindStrategy(Protocol):
    def kind(self) -> str: ...


S = TypeVar("S", bound=_KindStrategy)


class _StrategyRegistry(Generic[S]):
    """Shared kind -> strategy table."""

    role = "strategy"

    def __init__(self) -> None:
        self._strategies: dict[str, S] = {}
        self._sealed = False

    @classmethod
    def build(cls, strategies: Iterable[S]) -> Self:
        """Register every strategy, then seal."""
        registry = cls()
        for strategy in strategies:
            registry.register(strategy)
        registry.seal()
        return registry

    def register(self, strategy: S) -> None:
        if self._sealed:
            raise ConfigurationError(
                f"Cannot register {self.role} after the registry is sealed"
            )

        kind = normalize_kind(strategy.kind())
        if not kind:
            raise ConfigurationError(
                f"{type(strategy).__name__} declares an empty block kind"
            )
        if kind in self._strategies:
            raise ConfigurationError(
                f"Block {self.role} for kind '{kind}' is already registered"
            )

        self._strategies[kind] = strategy

    def seal(self) -> None:
        if not self._sealed:
            self._strategies = MappingProxyType(self._strategies)  # type: ignore[assignment]
            self._sealed = True
            logger.info(
                "%s sealed with kinds: %s",
                type(self).__name__,
                ", ".join(self._strategies) or "(none)",
            )

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, kind: str) -> S | None:
        return self._strategies.get(normalize_kind(kind))

    def has(self, kind: str) -> bool:
        return normalize_kind(kind) in self._strategies

    def kinds(self) -> list[str]:
        return list(self._strategies)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and self.has(kind)

    def __len__(self) -> int:
        return len(self._strategies)

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def _require_kind(self, block: Mapping[str, Any]) -> str:
        raw_kind = block.get("kind")
        if not isinstance(raw_kind, str) or not raw_kind.strip():
            raise DataShapeError(
                'Block data must contain a non-empty string "kind" field',
                field="kind",
            )
        return normalize_kind(raw_kind)


class SanitizerRegistry(_StrategyRegistry[BlockSanitizerPort]):
    """Dispatches block sanitization by kind; fails fast on anything unknown."""

    role = "sanitizer"

    def sanitize_block(self, block: Mapping[str, Any]) -> dict[str, Any]:
        """
        Sanitize one block with the strategy registered for its kind.

        The strategy's output is returned unmodified.

        Raises:
            DataShapeError: If the block is not a mapping or has no usable kind.
            MissingHandlerError: If no strategy handles the kind.
        """
        if not isinstance(block, Mapping):
            raise DataShapeError(
                f"Block data must be a mapping, got {type(block).__name__}"
            )

        kind = self._require_kind(block)
        strategy = self._strategies.get(kind)
        if strategy is None:
            raise MissingHandlerError(kind, self.kinds(), role=self.role)

        logger.debug("Sanitizing block of kind %s", kind)
        return strategy.sanitize({**block, "kind": kind})

    def sanitize_blocks(self, blocks: Sequence[Any]) -> list[dict[str, Any]]:
        """Sanitize every block in order; the first failure aborts the whole list."""
        sanitized: list[dict[str, Any]] = []

        for index, block in enumerate(blocks):
            if not isinstance(block, Mapping):
                raise DataShapeError(
                    f"Invalid block data at index {index}: expected mapping, "
                    f"got {type(block).__name__}",
                    index=index,
                )
            try:
                sanitized.append(self.sanitize_block(block))
            except DataShapeError as e:
                if e.index is not None:
                    raise
                raise DataShapeError(
                    f"Block {index}: {e}", index=index, field=e.field
                ) from e

        return sanitized


class ValidatorRegistry(_StrategyRegistry[BlockValidatorPort]):
    """Dispatches block validation by kind."""

    role = "validator"

    def validate_block(
        self,
        block: Mapping[str, Any],
        index: int | None = None,
    ) -> ValidationResult:
        """
        Validate one block; errors are keyed ``blocks.<index>.<field>``.

        Raises:
            DataShapeError: If the block has no usable kind.
            MissingHandlerError: If no strategy handles the kind.
        """
        kind = self._require_kind(block)
        strategy = self._strategies.get(kind)
        if strategy is None:
            raise MissingHandlerError(kind, self.kinds(), role=self.role)

        return strategy.validate(block).scoped(FieldPath("blocks", index))
