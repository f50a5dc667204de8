"""Skill routes: list rules, evaluate a request, validate patterns.

The rule file is read on every request so edits apply immediately.
"""

from __future__ import annotations

import os

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from skillcue.engine.loader import (
    RuleFileError,
    filter_overridden,
    load_rule_set,
    validate_rule_set,
)
from skillcue.engine.models import ActivationRequest, SkillRuleSet
from skillcue.engine.ranking import activate
from skillcue.report import build_payload, build_report


def _load_rules(request: Request) -> SkillRuleSet:
    config = request.app.state.config
    return load_rule_set(config.rules_path(request.app.state.project_root))


async def list_rules(request: Request) -> JSONResponse:
    """GET /api/skills/rules — list configured rules in file order."""
    try:
        rules = _load_rules(request)
    except RuleFileError as e:
        return JSONResponse({"error": str(e)}, status_code=422)
    return JSONResponse(
        {
            "version": rules.version,
            "rules": [r.model_dump(mode="json", by_alias=True) for r in rules.skills.values()],
            "count": len(rules),
        }
    )


async def activate_skills(request: Request) -> JSONResponse:
    """POST /api/skills/activate — evaluate a prompt and file list against the rules."""
    try:
        body = await request.json()
        activation_request = ActivationRequest.model_validate(body)
    except (ValueError, ValidationError):
        return JSONResponse({"error": "Body must be {prompt, file_paths}"}, status_code=422)

    try:
        rules = _load_rules(request)
    except RuleFileError as e:
        return JSONResponse({"error": str(e)}, status_code=422)

    rules = filter_overridden(rules, os.environ)
    result = activate(activation_request, rules)
    payload = build_payload(result)
    payload["report"] = build_report(result)
    return JSONResponse(payload)


async def validate_rules(request: Request) -> JSONResponse:
    """POST /api/skills/validate — report patterns that fail to compile."""
    try:
        rules = _load_rules(request)
    except RuleFileError as e:
        return JSONResponse({"error": str(e)}, status_code=422)
    defects = validate_rule_set(rules)
    return JSONResponse(
        {
            "valid": len(defects) == 0,
            "defect_count": len(defects),
            "defects": [d.model_dump() for d in defects],
        }
    )


routes = [
    Route("/api/skills/rules", list_rules, methods=["GET"]),
    Route("/api/skills/activate", activate_skills, methods=["POST"]),
    Route("/api/skills/validate", validate_rules, methods=["POST"]),
]
