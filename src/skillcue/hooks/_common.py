"""Hook plumbing: parse the hook payload and locate the project it runs in."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel, ConfigDict, field_validator

PROJECT_MARKERS = (".skillcue.json", ".git")


class HookInput(BaseModel):
    """The parts of a Claude Code hook payload the activation hook reads.

    Wrong-typed fields fall back to their defaults instead of failing, since a
    hook must never block the prompt over a payload it does not understand.
    """

    model_config = ConfigDict(extra="ignore")

    session_id: str | None = None
    cwd: str | None = None
    prompt: str = ""
    file_paths: list[str] = []

    @field_validator("session_id", "cwd", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> str | None:
        return v if isinstance(v, str) and v else None

    @field_validator("prompt", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("file_paths", mode="before")
    @classmethod
    def _paths(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [p for p in v if isinstance(p, str) and p]


def read_hook_input(stream: TextIO | None = None) -> HookInput | None:
    """Parse a hook payload from ``stream`` (stdin by default).

    Returns None when the stream is empty, unreadable, or not a JSON object.
    """
    stream = stream or sys.stdin
    try:
        raw = stream.read()
    except OSError:
        return None
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    return HookInput.model_validate(data)


def find_marked_root(start: Path) -> Path | None:
    """Nearest ancestor of ``start`` (inclusive) holding a project marker.

    ``.skillcue.json`` or a ``.git`` entry (directory, or file for worktrees)
    marks a project.
    """
    start = start.resolve()
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return None


def get_project_root(cwd: str | None = None) -> Path:
    """Resolve the project root for the current hook invocation.

    Resolution order:
    1. SKILLCUE_PROJECT_ROOT env var (explicit override)
    2. CLAUDE_PROJECT_DIR env var (set by Claude Code for hooks)
    3. Nearest marked ancestor of the hook's cwd
    4. The hook's cwd, or the process cwd
    """
    for var in ("SKILLCUE_PROJECT_ROOT", "CLAUDE_PROJECT_DIR"):
        env_root = os.environ.get(var)
        if env_root and Path(env_root).is_dir():
            return Path(env_root)

    base = Path(cwd) if cwd and Path(cwd).is_dir() else Path.cwd()
    return find_marked_root(base) or base
