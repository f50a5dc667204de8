"""System routes: health and version.

Health reports whether the configured rule file loads, so a bad edit to
``skill-rules.json`` shows up without calling the skill routes.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from skillcue import __version__
from skillcue.engine.loader import RuleFileError, load_rule_set


async def health(request: Request) -> JSONResponse:
    config = request.app.state.config
    rules_path = config.rules_path(request.app.state.project_root)
    body: dict = {"status": "ok", "rules_file": str(rules_path), "enabled": config.enabled}
    try:
        body["rule_count"] = len(load_rule_set(rules_path))
    except RuleFileError as e:
        body["status"] = "degraded"
        body["error"] = str(e)
    return JSONResponse(body)


async def version(request: Request) -> JSONResponse:
    return JSONResponse({"version": __version__, "name": "skillcue"})


routes = [
    Route("/health", health, methods=["GET"]),
    Route("/api/version", version, methods=["GET"]),
]
