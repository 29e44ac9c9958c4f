from pathlib import Path

import pytest

from portable_content.components.blocks import (
    MarkdownBlockSanitizer,
    MarkdownBlockValidator,
)
from portable_content.components.validation import (
    ContentSanitizer,
    ContentValidationService,
    ContentValidator,
    SanitizerRegistry,
    ValidatorRegistry,
)
from portable_content.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def sanitizer_registry() -> SanitizerRegistry:
    return SanitizerRegistry.build([MarkdownBlockSanitizer()])


@pytest.fixture
def validator_registry(rules) -> ValidatorRegistry:
    return ValidatorRegistry.build([MarkdownBlockValidator(rules.block_kinds.markdown)])


@pytest.fixture
def sanitizer(sanitizer_registry) -> ContentSanitizer:
    return ContentSanitizer(sanitizer_registry)


@pytest.fixture
def validator(validator_registry, rules) -> ContentValidator:
    return ContentValidator(validator_registry, rules.content)


@pytest.fixture
def service(sanitizer, validator) -> ContentValidationService:
    return ContentValidationService(sanitizer, validator)


@pytest.fixture
def valid_data() -> dict:
    return {
        "type": "note",
        "title": "Test Note",
        "summary": "A test summary",
        "blocks": [{"kind": "markdown", "source": "# Hello World"}],
    }
