"""MCP stdio server exposing skill matching as tools."""

from __future__ import annotations

import json
import os
from pathlib import Path

import anyio
import mcp.types as types
from pydantic import ValidationError
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server

from skillcue import __version__
from skillcue.config import CONFIG_FILENAME, load_activation_config
from skillcue.engine.loader import RuleFileError, filter_overridden, load_rule_set
from skillcue.engine.models import ActivationRequest
from skillcue.engine.ranking import activate
from skillcue.report import build_payload, build_report

MATCH_SKILLS_SCHEMA = {
    "type": "object",
    "properties": {
        "prompt": {"type": "string", "description": "User prompt to match against skill rules"},
        "file_paths": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Paths of files currently in context",
        },
    },
    "required": ["prompt"],
}

LIST_SKILL_RULES_SCHEMA = {
    "type": "object",
    "properties": {},
}


def create_mcp_server(project_root: Path | None = None) -> Server:
    """Create and configure the MCP server with skill matching tools."""
    server = Server("skillcue", __version__)
    root = project_root or Path.cwd()

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name="match_skills",
                description=(
                    "Find skills whose keyword, intent, or file triggers match a prompt. "
                    "Returns matches grouped by priority tier."
                ),
                inputSchema=MATCH_SKILLS_SCHEMA,
            ),
            types.Tool(
                name="list_skill_rules",
                description="List configured skill rules with their triggers.",
                inputSchema=LIST_SKILL_RULES_SCHEMA,
            ),
        ]

    @server.call_tool()
    async def call_tool(
        name: str,
        arguments: dict | None,
    ) -> list[types.TextContent]:
        args = arguments or {}
        if name not in ("match_skills", "list_skill_rules"):
            return [types.TextContent(type="text", text=f"Unknown tool: {name}")]

        config = load_activation_config(root / CONFIG_FILENAME)
        try:
            rules = load_rule_set(config.rules_path(root))
        except RuleFileError as e:
            return [types.TextContent(type="text", text=json.dumps({"error": str(e)}))]

        if name == "match_skills":
            try:
                request = ActivationRequest(
                    prompt=args.get("prompt", ""),
                    file_paths=args.get("file_paths", []),
                )
            except ValidationError as e:
                error = {"error": "Arguments must be {prompt, file_paths}", "detail": str(e)}
                return [types.TextContent(type="text", text=json.dumps(error))]
            activation = activate(request, filter_overridden(rules, os.environ))
            result = build_payload(activation)
            result["report"] = build_report(activation)
        else:
            result = {
                "rules": [r.model_dump(mode="json", by_alias=True) for r in rules.skills.values()],
                "count": len(rules),
            }

        return [types.TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        init_options = server.create_initialization_options(
            notification_options=NotificationOptions(),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    anyio.run(run_mcp_server)
