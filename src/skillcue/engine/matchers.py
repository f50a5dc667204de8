"""Pattern matchers: keyword containment, regex intents, and path globs.

All matchers are pure. Patterns that fail to compile come back as
PatternDefect values instead of raising, so one bad entry never takes
down the rest of a rule.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from skillcue.engine.models import PatternDefect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledPattern:
    source: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class PathMatch:
    matched: bool
    evidence: str | None = None


NO_PATH_MATCH = PathMatch(matched=False)


# ------------------------------------------------------------------ #
# Keywords
# ------------------------------------------------------------------ #
def match_keywords(prompt: str, keywords: Iterable[str]) -> str | None:
    """Return the first keyword found in the prompt (case-insensitive), or None."""
    prompt_lower = prompt.lower()
    for keyword in keywords:
        if keyword.lower() in prompt_lower:
            return keyword
    return None


def keyword_match(prompt: str, keywords: Iterable[str]) -> bool:
    return match_keywords(prompt, keywords) is not None


# ------------------------------------------------------------------ #
# Intent patterns
# ------------------------------------------------------------------ #
def compile_intent_patterns(
    sources: Iterable[str],
    rule_name: str = "",
) -> tuple[list[CompiledPattern], list[PatternDefect]]:
    """Compile intent regexes case-insensitively, collecting failures."""
    compiled: list[CompiledPattern] = []
    defects: list[PatternDefect] = []
    for source in sources:
        try:
            compiled.append(CompiledPattern(source, re.compile(source, re.IGNORECASE)))
        except re.error as e:
            defects.append(
                PatternDefect(rule_name=rule_name, pattern=source, trigger="intent", error=str(e))
            )
    return compiled, defects


def match_intents(prompt: str, patterns: Iterable[CompiledPattern]) -> str | None:
    """Return the source of the first pattern found anywhere in the prompt."""
    for pattern in patterns:
        if pattern.regex.search(prompt):
            return pattern.source
    return None


def intent_match(prompt: str, patterns: Iterable[str]) -> bool:
    compiled, defects = compile_intent_patterns(patterns)
    for defect in defects:
        logger.warning(f"Skipping invalid intent pattern {defect.pattern!r}: {defect.error}")
    return match_intents(prompt, compiled) is not None


# ------------------------------------------------------------------ #
# File path globs
# ------------------------------------------------------------------ #
def glob_to_regex(glob: str) -> str:
    """Translate a path glob to an anchored regex.

    ``**`` matches any run of characters including ``/``; a single ``*``
    stays within one path segment. Everything else is literal.
    """
    parts: list[str] = []
    i = 0
    while i < len(glob):
        if glob.startswith("**", i):
            parts.append(".*")
            i += 2
        elif glob[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(glob[i]))
            i += 1
    return "^" + "".join(parts) + "$"


def compile_glob_patterns(
    sources: Iterable[str],
    rule_name: str = "",
    trigger: str = "path",
) -> tuple[list[CompiledPattern], list[PatternDefect]]:
    compiled: list[CompiledPattern] = []
    defects: list[PatternDefect] = []
    for source in sources:
        try:
            compiled.append(CompiledPattern(source, re.compile(glob_to_regex(source))))
        except (re.error, TypeError) as e:
            defects.append(
                PatternDefect(rule_name=rule_name, pattern=source, trigger=trigger, error=str(e))
            )
    return compiled, defects


def match_file_paths(
    paths: Sequence[str],
    include: Sequence[CompiledPattern],
    exclude: Sequence[CompiledPattern] = (),
) -> PathMatch:
    """Return the first path hit by an include glob and by no exclude glob."""
    if not include:
        return NO_PATH_MATCH
    for path in paths:
        if any(p.regex.fullmatch(path) for p in exclude):
            continue
        if any(p.regex.fullmatch(path) for p in include):
            return PathMatch(matched=True, evidence=path)
    return NO_PATH_MATCH


def file_path_match(
    paths: Sequence[str],
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str] = (),
) -> PathMatch:
    include, include_defects = compile_glob_patterns(include_patterns)
    exclude, exclude_defects = compile_glob_patterns(exclude_patterns, trigger="exclusion")
    for defect in include_defects + exclude_defects:
        logger.warning(f"Skipping invalid path pattern {defect.pattern!r}: {defect.error}")
    return match_file_paths(paths, include, exclude)
