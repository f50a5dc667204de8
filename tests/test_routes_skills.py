"""Tests for skills and system HTTP API routes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from starlette.testclient import TestClient

from skillcue import __version__
from skillcue.config import ActivationConfig
from skillcue.server.app import create_app


@pytest.fixture
def client(tmp_path: Path, rules_file: Path) -> Any:
    app = create_app(project_root=tmp_path, config=ActivationConfig())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def empty_client(tmp_path: Path) -> Any:
    app = create_app(project_root=tmp_path, config=ActivationConfig())
    with TestClient(app) as c:
        yield c


# ------------------------------------------------------------------ #
# System routes
# ------------------------------------------------------------------ #
class TestSystemRoutes:
    def test_health_reports_rule_count(self, client: Any, rules_file: Path) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["rule_count"] == 4
        assert data["rules_file"] == str(rules_file)
        assert data["enabled"] is True

    def test_health_degraded_without_rules(self, empty_client: Any) -> None:
        resp = empty_client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "degraded"
        assert "rule_count" not in data
        assert data["error"]

    def test_version(self, client: Any) -> None:
        assert client.get("/api/version").json() == {"version": __version__, "name": "skillcue"}


# ------------------------------------------------------------------ #
# GET /api/skills/rules
# ------------------------------------------------------------------ #
class TestListRules:
    def test_returns_rules_in_file_order(self, client: Any) -> None:
        data = client.get("/api/skills/rules").json()
        assert data["count"] == 4
        assert [r["name"] for r in data["rules"]][:2] == ["deploy-guard", "backend-guidelines"]

    def test_rules_use_file_keys(self, client: Any) -> None:
        rule = client.get("/api/skills/rules").json()["rules"][0]
        assert rule["type"] == "guardrail"
        assert rule["promptTriggers"]["keywords"] == ["deploy"]

    def test_missing_rules_file_is_422(self, empty_client: Any) -> None:
        resp = empty_client.get("/api/skills/rules")
        assert resp.status_code == 422
        assert "error" in resp.json()

    def test_reflects_edits_without_restart(
        self, client: Any, rules_file: Path, write_rules
    ) -> None:
        write_rules(rules_file, {"skills": {"only": {}}})
        data = client.get("/api/skills/rules").json()
        assert [r["name"] for r in data["rules"]] == ["only"]


# ------------------------------------------------------------------ #
# POST /api/skills/activate
# ------------------------------------------------------------------ #
class TestActivate:
    def test_keyword_match(self, client: Any) -> None:
        resp = client.post("/api/skills/activate", json={"prompt": "please deploy this"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["activated"] is True
        assert data["tiers"]["critical"][0]["name"] == "deploy-guard"
        assert "SKILL ACTIVATION CHECK" in data["report"]

    def test_file_paths_match(self, client: Any) -> None:
        resp = client.post(
            "/api/skills/activate",
            json={"prompt": "", "file_paths": ["backend/src/a.test.ts", "backend/src/a.ts"]},
        )
        entry = resp.json()["tiers"]["high"][0]
        assert entry["match_kind"] == "file_path"
        assert entry["evidence"] == "backend/src/a.ts"

    def test_no_match(self, client: Any) -> None:
        data = client.post("/api/skills/activate", json={"prompt": "hi"}).json()
        assert data["activated"] is False
        assert data["count"] == 0
        assert data["report"] is None

    def test_invalid_body_is_422(self, client: Any) -> None:
        resp = client.post("/api/skills/activate", content=b"not json")
        assert resp.status_code == 422

    def test_wrong_shape_is_422(self, client: Any) -> None:
        resp = client.post("/api/skills/activate", json={"prompt": ["a", "list"]})
        assert resp.status_code == 422

    def test_missing_rules_file_is_422(self, empty_client: Any) -> None:
        resp = empty_client.post("/api/skills/activate", json={"prompt": "deploy"})
        assert resp.status_code == 422

    def test_env_override_skips_rule(self, client: Any, monkeypatch: pytest.MonkeyPatch) -> None:
        body = {"prompt": "refactor it"}
        assert client.post("/api/skills/activate", json=body).json()["activated"] is True
        monkeypatch.setenv("SKIP_REFACTOR_PLAYBOOK", "1")
        assert client.post("/api/skills/activate", json=body).json()["activated"] is False


# ------------------------------------------------------------------ #
# POST /api/skills/validate
# ------------------------------------------------------------------ #
class TestValidate:
    def test_reports_defects(self, client: Any) -> None:
        data = client.post("/api/skills/validate").json()
        assert data["valid"] is False
        assert data["defect_count"] == 1
        assert data["defects"][0]["rule_name"] == "broken-intent"

    def test_clean_rules_are_valid(self, client: Any, rules_file: Path, write_rules) -> None:
        write_rules(rules_file, {"skills": {"ok": {"promptTriggers": {"keywords": ["x"]}}}})
        data = client.post("/api/skills/validate").json()
        assert data == {"valid": True, "defect_count": 0, "defects": []}
