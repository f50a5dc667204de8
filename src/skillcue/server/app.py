"""Starlette app factory for the skill activation API."""

from __future__ import annotations

from pathlib import Path

from starlette.applications import Starlette

from skillcue.config import CONFIG_FILENAME, ActivationConfig, load_activation_config
from skillcue.server.routes_skills import routes as skills_routes
from skillcue.server.routes_system import routes as system_routes


def create_app(
    project_root: Path | None = None,
    config: ActivationConfig | None = None,
) -> Starlette:
    """Create a Starlette app serving rules from the given project root."""
    root = project_root or Path.cwd()
    app = Starlette(routes=system_routes + skills_routes)
    app.state.project_root = root
    app.state.config = config or load_activation_config(root / CONFIG_FILENAME)
    return app
