"""Uvicorn launcher for the skill activation API."""

from __future__ import annotations

from pathlib import Path

from skillcue.config import CONFIG_FILENAME, ActivationConfig, load_activation_config


def run_server(config: ActivationConfig | None = None, project_root: Path | None = None) -> None:
    """Start the HTTP API server with uvicorn."""
    import uvicorn

    from skillcue.server.app import create_app

    root = project_root or Path.cwd()
    if config is None:
        config = load_activation_config(root / CONFIG_FILENAME)

    uvicorn.run(
        create_app(project_root=root, config=config),
        host="127.0.0.1",
        port=config.port,
    )
