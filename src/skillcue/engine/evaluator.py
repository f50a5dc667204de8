"""Rule evaluator: run each rule's triggers against one request."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from skillcue.engine.matchers import (
    compile_glob_patterns,
    compile_intent_patterns,
    match_file_paths,
    match_intents,
    match_keywords,
)
from skillcue.engine.models import (
    ActivationRequest,
    Evaluation,
    MatchKind,
    PatternDefect,
    SkillMatch,
    SkillRule,
    SkillRuleSet,
)

logger = logging.getLogger(__name__)


def evaluate_rule(
    rule: SkillRule,
    request: ActivationRequest,
) -> tuple[SkillMatch | None, list[PatternDefect]]:
    """Return the first satisfied trigger for a rule plus any pattern defects.

    Order is fixed: keywords, then intent patterns, then file paths. Prompt
    triggers are skipped for an empty prompt.
    """
    defects: list[PatternDefect] = []
    prompt = request.prompt
    prompt_triggers = rule.prompt_triggers
    file_triggers = rule.file_triggers

    if prompt_triggers is not None and prompt:
        if prompt_triggers.keywords:
            keyword = match_keywords(prompt, prompt_triggers.keywords)
            if keyword is not None:
                match = SkillMatch(rule=rule, match_kind=MatchKind.KEYWORD, evidence=keyword)
                return match, defects

        if prompt_triggers.intent_patterns:
            compiled, bad = compile_intent_patterns(prompt_triggers.intent_patterns, rule.name)
            defects.extend(bad)
            source = match_intents(prompt, compiled)
            if source is not None:
                match = SkillMatch(rule=rule, match_kind=MatchKind.INTENT, evidence=source)
                return match, defects

    if file_triggers is not None and file_triggers.path_patterns and request.file_paths:
        include, bad = compile_glob_patterns(file_triggers.path_patterns, rule.name, "path")
        defects.extend(bad)
        exclude, bad = compile_glob_patterns(file_triggers.path_exclusions, rule.name, "exclusion")
        defects.extend(bad)
        hit = match_file_paths(request.file_paths, include, exclude)
        if hit.matched and hit.evidence is not None:
            match = SkillMatch(rule=rule, match_kind=MatchKind.FILE_PATH, evidence=hit.evidence)
            return match, defects

    return None, defects


def evaluate(
    request: ActivationRequest,
    rules: SkillRuleSet | Mapping[str, SkillRule],
) -> Evaluation:
    """Evaluate every rule in order. At most one match per rule."""
    skills = rules.skills if isinstance(rules, SkillRuleSet) else rules
    evaluation = Evaluation()

    for name, rule in skills.items():
        if not rule.name:
            rule = rule.model_copy(update={"name": name})
        match, defects = evaluate_rule(rule, request)
        for defect in defects:
            logger.warning(
                f"Rule '{defect.rule_name}': skipping invalid {defect.trigger} pattern "
                f"{defect.pattern!r} ({defect.error})"
            )
        evaluation.defects.extend(defects)
        if match is not None:
            evaluation.matches.append(match)

    logger.debug(f"Evaluated {len(skills)} rules: {len(evaluation.matches)} matched")
    return evaluation
