"""Rule file loading, validation, and environment-based rule skipping."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from skillcue.engine.matchers import compile_glob_patterns, compile_intent_patterns
from skillcue.engine.models import PatternDefect, SkillRuleSet

_TRUTHY = ("true", "1", "yes")


class RuleFileError(Exception):
    """Raised when a rule file is missing, unreadable, or malformed."""


def load_rule_set(path: Path) -> SkillRuleSet:
    """Read and validate a skill-rules.json file. Always reads from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise RuleFileError(f"Rule file not found: {path}") from e
    except OSError as e:
        raise RuleFileError(f"Cannot read rule file {path}: {e}") from e

    if not text.strip():
        return SkillRuleSet()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RuleFileError(f"Invalid JSON in {path}: {e}") from e

    return parse_rule_set(data, source=str(path))


def parse_rule_set(data: object, source: str = "<data>") -> SkillRuleSet:
    if not isinstance(data, dict):
        raise RuleFileError(f"{source}: expected a JSON object at top level")
    try:
        return SkillRuleSet.model_validate(data)
    except ValidationError as e:
        raise RuleFileError(f"{source}: invalid rule definition: {e}") from e


def validate_rule_set(rules: SkillRuleSet) -> list[PatternDefect]:
    """Compile every pattern up front and return all defects found."""
    defects: list[PatternDefect] = []
    for name, rule in rules.skills.items():
        if rule.prompt_triggers is not None:
            _, bad = compile_intent_patterns(rule.prompt_triggers.intent_patterns, name)
            defects.extend(bad)
        if rule.file_triggers is not None:
            _, bad = compile_glob_patterns(rule.file_triggers.path_patterns, name, "path")
            defects.extend(bad)
            _, bad = compile_glob_patterns(rule.file_triggers.path_exclusions, name, "exclusion")
            defects.extend(bad)
    return defects


def filter_overridden(rules: SkillRuleSet, environ: Mapping[str, str]) -> SkillRuleSet:
    """Drop rules whose envOverride variable is set to a truthy value."""
    kept = {}
    for name, rule in rules.skills.items():
        var = rule.skip_conditions.env_override if rule.skip_conditions else None
        if var and environ.get(var, "").lower() in _TRUTHY:
            continue
        kept[name] = rule
    return SkillRuleSet(version=rules.version, skills=kept)
