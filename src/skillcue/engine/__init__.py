"""Skill activation engine: rule models, matchers, evaluation, and ranking."""

from skillcue.engine.evaluator import evaluate, evaluate_rule
from skillcue.engine.loader import (
    RuleFileError,
    filter_overridden,
    load_rule_set,
    parse_rule_set,
    validate_rule_set,
)
from skillcue.engine.matchers import (
    PathMatch,
    file_path_match,
    glob_to_regex,
    intent_match,
    keyword_match,
)
from skillcue.engine.models import (
    ActivationRequest,
    ActivationResult,
    Enforcement,
    Evaluation,
    FileTriggers,
    MatchKind,
    PatternDefect,
    Priority,
    PromptTriggers,
    RuleKind,
    SkillMatch,
    SkillRule,
    SkillRuleSet,
)
from skillcue.engine.ranking import activate, group_matches, rank_matches

__all__ = [
    "ActivationRequest",
    "ActivationResult",
    "Enforcement",
    "Evaluation",
    "FileTriggers",
    "MatchKind",
    "PathMatch",
    "PatternDefect",
    "Priority",
    "PromptTriggers",
    "RuleFileError",
    "RuleKind",
    "SkillMatch",
    "SkillRule",
    "SkillRuleSet",
    "activate",
    "evaluate",
    "evaluate_rule",
    "file_path_match",
    "filter_overridden",
    "glob_to_regex",
    "group_matches",
    "intent_match",
    "keyword_match",
    "load_rule_set",
    "parse_rule_set",
    "rank_matches",
    "validate_rule_set",
]
