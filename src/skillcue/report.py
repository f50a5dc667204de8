"""Report builder: render an ActivationResult for the assistant or for JSON surfaces."""

from __future__ import annotations

from typing import Any

from skillcue.engine.models import ActivationResult, Enforcement, MatchKind, Priority, SkillMatch

_RULE = "━" * 44

TIER_LABELS: dict[Priority, str] = {
    Priority.CRITICAL: "CRITICAL SKILLS (REQUIRED)",
    Priority.HIGH: "RECOMMENDED SKILLS",
    Priority.MEDIUM: "SUGGESTED SKILLS",
    Priority.LOW: "OPTIONAL SKILLS",
}

_ENFORCEMENT_MARKERS: dict[Enforcement, str] = {
    Enforcement.BLOCK: "[must use]",
    Enforcement.WARN: "[warning]",
    Enforcement.SUGGEST: "",
}

_MATCH_LABELS: dict[MatchKind, str] = {
    MatchKind.KEYWORD: "keyword",
    MatchKind.INTENT: "intent",
    MatchKind.FILE_PATH: "file",
}


def _describe(match: SkillMatch) -> list[str]:
    rule = match.rule
    marker = _ENFORCEMENT_MARKERS[rule.enforcement]
    head = f"    -> {rule.name}"
    if marker:
        head += f" {marker}"
    lines = [head]
    if rule.description:
        lines.append(f"       {rule.description}")
    lines.append(f"       matched {_MATCH_LABELS[match.match_kind]}: {match.evidence}")
    if rule.enforcement == Enforcement.BLOCK and rule.block_message:
        lines.append(f"       {rule.block_message}")
    return lines


def build_report(result: ActivationResult | None) -> str | None:
    """Render the activation banner. Returns None when nothing activated."""
    if result is None or result.count == 0:
        return None

    lines: list[str] = ["", _RULE, "SKILL ACTIVATION CHECK", _RULE, ""]
    for priority in Priority:
        group = result.tier(priority)
        if not group:
            continue
        lines.append(f"  {TIER_LABELS[priority]}:")
        for match in group:
            lines.extend(_describe(match))
        lines.append("")

    if any(m.rule.enforcement == Enforcement.BLOCK for m in result.matches):
        lines.append("  ACTION: Invoke the required skills above before responding")
    else:
        lines.append("  ACTION: Use the Skill tool to invoke relevant skills")
    lines.append(_RULE)
    lines.append("")
    return "\n".join(lines)


def _match_payload(match: SkillMatch) -> dict[str, Any]:
    rule = match.rule
    return {
        "name": rule.name,
        "type": rule.kind.value,
        "enforcement": rule.enforcement.value,
        "priority": rule.priority.value,
        "description": rule.description,
        "match_kind": match.match_kind.value,
        "evidence": match.evidence,
    }


def build_payload(result: ActivationResult | None) -> dict[str, Any]:
    """JSON-serialisable summary used by the HTTP API and MCP tools."""
    if result is None:
        return {"activated": False, "count": 0, "tiers": {p.value: [] for p in Priority}}
    return {
        "activated": result.count > 0,
        "count": result.count,
        "tiers": {p.value: [_match_payload(m) for m in result.tier(p)] for p in Priority},
    }
