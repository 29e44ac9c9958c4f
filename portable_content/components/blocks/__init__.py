"""
Blocks component - per-kind sanitizer and validator strategies.

Adding a kind means adding a strategy pair here; the orchestrator is untouched.
"""

from portable_content.rules.models import Rules

from .markdown import (
    MarkdownBlockSanitizer,
    MarkdownBlockValidator,
    sanitize_markdown_source,
)


def default_block_sanitizers() -> list:
    """Sanitizer strategies for every built-in kind."""
    return [MarkdownBlockSanitizer()]


def default_block_validators(rules: Rules | None = None) -> list:
    """Validator strategies for every built-in kind, configured from rules."""
    rules = rules or Rules()
    return [MarkdownBlockValidator(rules.block_kinds.markdown)]


__all__ = [
    "MarkdownBlockSanitizer",
    "MarkdownBlockValidator",
    "default_block_sanitizers",
    "default_block_validators",
    "sanitize_markdown_source",
]
