"""Ranking and tier grouping for matched rules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from skillcue.engine.evaluator import evaluate
from skillcue.engine.models import (
    ActivationRequest,
    ActivationResult,
    Priority,
    SkillMatch,
    SkillRule,
    SkillRuleSet,
)


def rank_matches(matches: Iterable[SkillMatch]) -> list[SkillMatch]:
    """Sort by priority; equal priorities keep their rule-set order."""
    return sorted(matches, key=lambda m: m.rule.priority.rank)


def group_matches(matches: Iterable[SkillMatch]) -> ActivationResult | None:
    """Partition matches into priority tiers. None means nothing activated."""
    ranked = rank_matches(matches)
    if not ranked:
        return None
    tiers: dict[str, list[SkillMatch]] = {p.value: [] for p in Priority}
    for match in ranked:
        tiers[match.rule.priority.value].append(match)
    return ActivationResult(**tiers)


def activate(
    request: ActivationRequest,
    rules: SkillRuleSet | Mapping[str, SkillRule],
) -> ActivationResult | None:
    return group_matches(evaluate(request, rules).matches)
