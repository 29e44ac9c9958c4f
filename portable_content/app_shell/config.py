import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from portable_content.rules.loader import default_rules, load_rules
from portable_content.rules.models import Rules

logger = logging.getLogger(__name__)

ENV_RULES_PATH = "PC_RULES_PATH"
ENV_LOG_LEVEL = "PC_LOG_LEVEL"

DEFAULT_RULES_PATH = "rules.yaml"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    rules_path: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        level = env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid {ENV_LOG_LEVEL}: {level!r}")
        return cls(
            rules_path=Path(env.get(ENV_RULES_PATH, DEFAULT_RULES_PATH)),
            log_level=level,
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def resolve_rules(settings: Settings) -> Rules:
    """
    Load rules from the configured path.

    A missing file falls back to built-in defaults; an invalid file is fatal.
    """
    if not settings.rules_path.exists():
        logger.warning(
            "Rules file %s not found, using built-in defaults", settings.rules_path
        )
        return default_rules()
    return load_rules(settings.rules_path)
