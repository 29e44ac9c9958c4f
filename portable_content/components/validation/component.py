"""
Validation component - sanitize-then-validate pipeline orchestration.

Pipeline:
    raw -> ContentSanitizer (-> SanitizerRegistry -> block strategies)
        -> ContentValidator (-> ValidatorRegistry -> block strategies)
        -> ValidationResult

Error namespaces:
- "sanitization": the request was structurally broken (DataShapeError,
  MissingHandlerError); no data is returned
- field paths / "general": the request was well-formed but breaks a rule

ConfigurationError is never caught here; it can only happen at composition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from functools import lru_cache
from typing import Any

from portable_content.domain.errors import SanitizationError
from portable_content.rules.models import Rules

from .models import (
    ProcessDetailsInput,
    ProcessingDetails,
    SanitizationStats,
    ValidateCreationInput,
    ValidateUpdateInput,
    ValidationResult,
)
from .ports import (
    BlockSanitizerPort,
    BlockValidatorPort,
    ContentSanitizerPort,
    ContentValidatorPort,
)
from .registry import SanitizerRegistry, ValidatorRegistry
from .sanitizer import ContentSanitizer
from .validator import ContentValidator

logger = logging.getLogger(__name__)

SANITIZATION = "sanitization"


class ContentValidationService:
    """
    Orchestrates content sanitization and validation.

    Sanitized data is returned (via ``ValidationResult.get_data()``) only when
    every rule passes.
    """

    def __init__(
        self,
        sanitizer: ContentSanitizerPort,
        validator: ContentValidatorPort,
    ) -> None:
        self._sanitizer = sanitizer
        self._validator = validator

    def validate_content_creation(self, data: Mapping[str, Any]) -> ValidationResult:
        """Sanitize, then validate with creation rules (type and blocks required)."""
        return self._run(data, self._validator.validate_creation)

    def validate_content_update(self, data: Mapping[str, Any]) -> ValidationResult:
        """Sanitize, then validate with update rules (every field optional)."""
        return self._run(data, self._validator.validate_update)

    def _run(
        self,
        data: Mapping[str, Any],
        validate: Callable[[Mapping[str, Any]], ValidationResult],
    ) -> ValidationResult:
        try:
            sanitized = self._sanitizer.sanitize(data)
        except SanitizationError as e:
            logger.warning("Sanitization rejected content: %s", e)
            return ValidationResult.single_error(SANITIZATION, str(e))

        result = validate(sanitized)
        if result.is_valid():
            return ValidationResult.success_with_data(sanitized)

        logger.debug("Content failed validation on fields: %s", result.get_fields_with_errors())
        return result

    def sanitize_content(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Sanitize without validating (previews).

        Raises:
            SanitizationError: If the input cannot be sanitized.
        """
        return self._sanitizer.sanitize(data)

    def validate_sanitized_content(self, sanitized: Mapping[str, Any]) -> ValidationResult:
        """Validate pre-sanitized data with creation rules."""
        return self._validator.validate_creation(sanitized)

    def get_sanitization_stats(
        self,
        original: Mapping[str, Any],
        sanitized: Mapping[str, Any],
    ) -> SanitizationStats:
        return self._sanitizer.get_sanitization_stats(original, sanitized)

    def process_content_with_details(self, data: Mapping[str, Any]) -> ProcessingDetails:
        """Run the creation pipeline and return every intermediate result."""
        try:
            sanitized = self._sanitizer.sanitize(data)
        except SanitizationError as e:
            logger.warning("Sanitization rejected content: %s", e)
            error = ValidationResult.single_error(SANITIZATION, str(e))
            return ProcessingDetails(
                sanitized_data={},
                sanitization_stats=None,
                validation_result=error,
                final_result=error,
            )

        stats = self._sanitizer.get_sanitization_stats(data, sanitized)
        validation = self._validator.validate_creation(sanitized)
        final = (
            ValidationResult.success_with_data(sanitized)
            if validation.is_valid()
            else validation
        )

        return ProcessingDetails(
            sanitized_data=sanitized,
            sanitization_stats=stats,
            validation_result=validation,
            final_result=final,
        )


# --- Factory ---


def create_validation_service(
    rules: Rules | None = None,
    *,
    sanitizers: Iterable[BlockSanitizerPort] | None = None,
    validators: Iterable[BlockValidatorPort] | None = None,
) -> ContentValidationService:
    """
    Compose a validation service.

    Registries are built and sealed here, once.

    Raises:
        ConfigurationError: If two strategies claim the same kind.
    """
    from portable_content.components.blocks import (
        default_block_sanitizers,
        default_block_validators,
    )

    rules = rules or Rules()
    if sanitizers is None:
        sanitizers = default_block_sanitizers()
    if validators is None:
        validators = default_block_validators(rules)

    sanitizer_registry = SanitizerRegistry.build(sanitizers)
    validator_registry = ValidatorRegistry.build(validators)

    return ContentValidationService(
        sanitizer=ContentSanitizer(sanitizer_registry),
        validator=ContentValidator(validator_registry, rules.content),
    )


@lru_cache(maxsize=1)
def _default_service() -> ContentValidationService:
    return create_validation_service()


# --- Component Entry Points ---


def run_validate_creation(
    inp: ValidateCreationInput,
    *,
    service: ContentValidationService | None = None,
) -> ValidationResult:
    """Validate a content creation request."""
    return (service or _default_service()).validate_content_creation(inp.data)


def run_validate_update(
    inp: ValidateUpdateInput,
    *,
    service: ContentValidationService | None = None,
) -> ValidationResult:
    """Validate a content update request."""
    return (service or _default_service()).validate_content_update(inp.data)


def run_process_details(
    inp: ProcessDetailsInput,
    *,
    service: ContentValidationService | None = None,
) -> ProcessingDetails:
    """Diagnostic pipeline run."""
    return (service or _default_service()).process_content_with_details(inp.data)


def run(
    inp: ValidateCreationInput | ValidateUpdateInput | ProcessDetailsInput,
    *,
    service: ContentValidationService | None = None,
) -> ValidationResult | ProcessingDetails:
    """
    Main entry point for the validation component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ValidateCreationInput):
        return run_validate_creation(inp, service=service)
    elif isinstance(inp, ValidateUpdateInput):
        return run_validate_update(inp, service=service)
    elif isinstance(inp, ProcessDetailsInput):
        return run_process_details(inp, service=service)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
