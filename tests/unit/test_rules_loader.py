import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from portable_content.app_shell.config import (
    ENV_LOG_LEVEL,
    ENV_RULES_PATH,
    Settings,
    resolve_rules,
)
from portable_content.rules.loader import default_rules, load_rules
from portable_content.rules.models import ContentRules, LengthRule, RangeRule

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def test_load_shipped_rules():
    rules = load_rules(PROJECT_ROOT / "rules.yaml")
    assert rules == default_rules()


def test_load_partial_rules_uses_defaults(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("content:\n  title:\n    max: 80\n", encoding="utf-8")

    rules = load_rules(path)

    assert rules.content.title.max == 80
    assert rules.content.summary.max == 1000
    assert rules.block_kinds.markdown.max_source_length == 100_000


def test_load_fenced_yaml(tmp_path: Path):
    path = tmp_path / "rules.md"
    path.write_text(
        "# Rules\n\nSome prose.\n\n```yaml\nblock_kinds:\n  markdown:\n"
        "    check_link_targets: false\n```\n\nMore prose.\n",
        encoding="utf-8",
    )

    rules = load_rules(path)

    assert rules.block_kinds.markdown.check_link_targets is False


def test_load_empty_file(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("", encoding="utf-8")
    assert load_rules(path) == default_rules()


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("content: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


@pytest.mark.parametrize(
    "body",
    [
        "content:\n  title:\n    max: 0\n",
        "unknown_section: true\n",
        "content:\n  blocks:\n    min: -1\n    max: 10\n",
        "content:\n  titel:\n    max: 80\n",
        "content:\n  blocks:\n    min: 5\n    max: 2\n",
        "block_kinds:\n  markdown:\n    check_fences: false\n",
    ],
)
def test_invalid_schema(tmp_path: Path, body: str):
    path = tmp_path / "rules.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


# --- Settings ---

def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.rules_path == Path("rules.yaml")
    assert settings.log_level == "INFO"


def test_settings_from_env():
    settings = Settings.from_env({ENV_RULES_PATH: "/etc/pc.yaml", ENV_LOG_LEVEL: " debug "})
    assert settings.rules_path == Path("/etc/pc.yaml")
    assert settings.log_level == "DEBUG"


def test_settings_invalid_level():
    with pytest.raises(ValueError, match=ENV_LOG_LEVEL):
        Settings.from_env({ENV_LOG_LEVEL: "chatty"})


def test_resolve_rules_missing_file_falls_back(tmp_path: Path, caplog):
    settings = Settings(rules_path=tmp_path / "absent.yaml")
    with caplog.at_level(logging.WARNING):
        rules = resolve_rules(settings)
    assert rules == default_rules()
    assert "not found" in caplog.text


def test_resolve_rules_invalid_file_is_fatal(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("rules_version: [1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        resolve_rules(Settings(rules_path=path))


# --- Rule models ---

def test_range_rule_bounds():
    assert RangeRule(min=3, max=3).min == 3
    with pytest.raises(ValidationError, match="must not exceed"):
        RangeRule(min=4, max=3)


def test_nested_rules_reject_unknown_keys():
    with pytest.raises(ValidationError):
        ContentRules.model_validate({"titel": {"max": 80}})
    with pytest.raises(ValidationError):
        LengthRule.model_validate({"max": 10, "min": 1})
