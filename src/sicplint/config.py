"""
Linter Configuration

Defaults match the study-notes style guide. An explicit YAML file may
override them:

    max_columns: 100
    extensions: [".ss", ".scm"]
    indent_rules:
      define-test: [special]
      my-module: [special, wrapper]
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .linter.rules import IndentRules, RuleTable, parse_flags
from .linter.state import MAX_DEPTH


# Maximum number of columns allowed by the style guide.
MAX_COLUMNS = 80

# Skip alignment checks on lines ending with this comment.
NO_ALIGN_COMMENT = "; NOALIGN"


@dataclass(frozen=True)
class LintConfig:
    max_columns: int = MAX_COLUMNS
    max_depth: int = MAX_DEPTH
    no_align_comment: str = NO_ALIGN_COMMENT
    section_operators: Tuple[str, ...] = ("Chapter", "Section", "Exercise")
    use_keyword: str = "use"
    # Suffixes picked up when a directory is given on the command line.
    extensions: Tuple[str, ...] = (".ss", ".md")
    indent_rules: Mapping[str, IndentRules] = field(default_factory=dict)

    def rule_table(self) -> RuleTable:
        return RuleTable(self.indent_rules)


_INT_KEYS = ("max_columns", "max_depth")
_STR_KEYS = ("no_align_comment", "use_keyword")
_LIST_KEYS = ("section_operators", "extensions")


def config_from_dict(data: Dict[str, Any]) -> LintConfig:
    """Build a LintConfig from parsed YAML, validating every key."""
    if not isinstance(data, dict):
        raise ConfigError("config must be a mapping")
    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _INT_KEYS:
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"{key} must be a positive integer, got {value!r}")
            overrides[key] = value
        elif key in _STR_KEYS:
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{key} must be a non-empty string")
            overrides[key] = value
        elif key in _LIST_KEYS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key} must be a list of strings")
            overrides[key] = tuple(value)
        elif key == "indent_rules":
            overrides[key] = _parse_indent_rules(value)
        else:
            raise ConfigError(f"unknown config key {key!r}")
    if overrides.get("max_depth", MAX_DEPTH) < 2:
        raise ConfigError("max_depth must be at least 2")
    return replace(LintConfig(), **overrides)


def _parse_indent_rules(value: Any) -> Dict[str, IndentRules]:
    if not isinstance(value, dict):
        raise ConfigError("indent_rules must map operator names to flag lists")
    rules = {}
    for name, flags in value.items():
        if isinstance(flags, str):
            flags = [flags]
        if not isinstance(flags, list):
            raise ConfigError(f"indent_rules.{name} must be a list of flags")
        try:
            rules[str(name)] = parse_flags(flags)
        except ValueError as e:
            raise ConfigError(f"indent_rules.{name}: {e}") from None
    return rules


def load_config(config_path: Optional[Path] = None) -> LintConfig:
    """Load configuration from a YAML file, or return the defaults."""
    if config_path is None:
        return LintConfig()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config {config_path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
    return config_from_dict(data)
