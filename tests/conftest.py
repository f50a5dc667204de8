"""Shared fixtures for skillcue tests."""

import json
from pathlib import Path

import pytest

SAMPLE_RULES: dict = {
    "version": "1.0",
    "skills": {
        "deploy-guard": {
            "type": "guardrail",
            "enforcement": "block",
            "priority": "critical",
            "description": "Deployment checklist",
            "promptTriggers": {"keywords": ["deploy"]},
            "blockMessage": "Run the deploy checklist first.",
        },
        "backend-guidelines": {
            "type": "domain",
            "enforcement": "suggest",
            "priority": "high",
            "description": "Backend conventions",
            "promptTriggers": {
                "keywords": ["controller"],
                "intentPatterns": ["(create|add).*?(route|endpoint)"],
            },
            "fileTriggers": {
                "pathPatterns": ["backend/**/*.ts"],
                "pathExclusions": ["**/*.test.ts"],
            },
        },
        "docs-style": {
            "priority": "low",
            "description": "Documentation tone",
            "fileTriggers": {"pathPatterns": ["*.md"]},
        },
        "broken-intent": {
            "priority": "medium",
            "description": "Refactoring playbook",
            "promptTriggers": {"intentPatterns": ["(unclosed", "refactor"]},
            "skipConditions": {"envOverride": "SKIP_REFACTOR_PLAYBOOK"},
        },
    },
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of tests."""
    for var in (
        "SKILLCUE_ENABLED",
        "SKILLCUE_RULES_FILE",
        "SKILLCUE_PORT",
        "SKILLCUE_PROJECT_ROOT",
        "CLAUDE_PROJECT_DIR",
        "SKIP_REFACTOR_PLAYBOOK",
    ):
        monkeypatch.delenv(var, raising=False)


def _write_rules(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def sample_rules() -> dict:
    return json.loads(json.dumps(SAMPLE_RULES))


@pytest.fixture
def write_rules():
    """Factory: write a rules dict to a path and return the path."""
    return _write_rules


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """Sample rules written to the default location under tmp_path."""
    return _write_rules(tmp_path / ".claude" / "skills" / "skill-rules.json", SAMPLE_RULES)
