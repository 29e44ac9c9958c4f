"""
Validation component - two-stage sanitize-then-validate pipeline.
"""

from .component import (
    SANITIZATION,
    ContentValidationService,
    create_validation_service,
    run,
    run_process_details,
    run_validate_creation,
    run_validate_update,
)
from .models import (
    FieldPath,
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
from .validator import GENERAL, ContentValidator

__all__ = [
    # Entry points
    "run",
    "run_process_details",
    "run_validate_creation",
    "run_validate_update",
    # Orchestration
    "ContentValidationService",
    "create_validation_service",
    "ContentSanitizer",
    "ContentValidator",
    "SanitizerRegistry",
    "ValidatorRegistry",
    # Input models
    "ProcessDetailsInput",
    "ValidateCreationInput",
    "ValidateUpdateInput",
    # Output models
    "FieldPath",
    "ProcessingDetails",
    "SanitizationStats",
    "ValidationResult",
    # Ports
    "BlockSanitizerPort",
    "BlockValidatorPort",
    "ContentSanitizerPort",
    "ContentValidatorPort",
    # Error namespaces
    "GENERAL",
    "SANITIZATION",
]
