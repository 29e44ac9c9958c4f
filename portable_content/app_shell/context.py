from __future__ import annotations

import logging
from dataclasses import dataclass

from portable_content.adapters.memory_repo import InMemoryContentRepo
from portable_content.app_shell.config import Settings, configure_logging, resolve_rules
from portable_content.components.blocks import (
    default_block_sanitizers,
    default_block_validators,
)
from portable_content.components.content import ContentRepoPort, ContentService
from portable_content.components.validation import (
    ContentSanitizer,
    ContentValidationService,
    ContentValidator,
    SanitizerRegistry,
    ValidatorRegistry,
)
from portable_content.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceContext:
    """Composition root; registries are built here once and never mutated."""

    rules: Rules
    sanitizer_registry: SanitizerRegistry
    validator_registry: ValidatorRegistry
    validation_service: ContentValidationService
    content_service: ContentService
    content_repo: ContentRepoPort

    @classmethod
    def create(
        cls,
        rules: Rules,
        content_repo: ContentRepoPort | None = None,
    ) -> ServiceContext:
        # Registries (ConfigurationError propagates: composition defect)
        sanitizer_registry = SanitizerRegistry.build(default_block_sanitizers())
        validator_registry = ValidatorRegistry.build(default_block_validators(rules))

        # Pipeline
        validation_service = ContentValidationService(
            sanitizer=ContentSanitizer(sanitizer_registry),
            validator=ContentValidator(validator_registry, rules.content),
        )

        # Persistence
        repo = content_repo if content_repo is not None else InMemoryContentRepo()
        content_service = ContentService(repo, validation_service)

        logger.info(
            "Service context ready (block kinds: %s)",
            ", ".join(sanitizer_registry.kinds()),
        )

        return cls(
            rules=rules,
            sanitizer_registry=sanitizer_registry,
            validator_registry=validator_registry,
            validation_service=validation_service,
            content_service=content_service,
            content_repo=repo,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ServiceContext:
        settings = settings or Settings.from_env()
        configure_logging(settings.log_level)
        return cls.create(resolve_rules(settings))
