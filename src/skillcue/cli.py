"""CLI entry point for skillcue."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import cast

from skillcue import __version__
from skillcue.config import CONFIG_FILENAME, load_activation_config
from skillcue.engine.loader import (
    RuleFileError,
    filter_overridden,
    load_rule_set,
    validate_rule_set,
)
from skillcue.engine.models import ActivationRequest, SkillRuleSet
from skillcue.engine.ranking import activate
from skillcue.report import build_payload, build_report


def _resolve_rules_path(args: argparse.Namespace) -> Path:
    rules = cast(Path | None, args.rules)
    if rules is not None:
        return rules
    project_root = Path.cwd()
    config = load_activation_config(project_root / CONFIG_FILENAME)
    return config.rules_path(project_root)


def _load_or_exit(path: Path) -> SkillRuleSet:
    try:
        return load_rule_set(path)
    except RuleFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_evaluate(args: argparse.Namespace) -> None:
    rules = filter_overridden(_load_or_exit(_resolve_rules_path(args)), os.environ)
    request = ActivationRequest(
        prompt=cast(str, args.prompt),
        file_paths=cast(list[str], args.files),
    )
    result = activate(request, rules)

    if args.json:
        print(json.dumps(build_payload(result), indent=2))
        return

    report = build_report(result)
    if report:
        print(report)


def _cmd_validate(args: argparse.Namespace) -> None:
    path = _resolve_rules_path(args)
    rules = _load_or_exit(path)
    defects = validate_rule_set(rules)

    print(f"Rules file: {path}")
    print(f"Rules:      {len(rules)}")
    untriggered = [name for name, rule in rules.skills.items() if not rule.has_triggers]
    if untriggered:
        print(f"No triggers: {', '.join(untriggered)}")

    if not defects:
        print("All patterns compile.")
        return

    print(f"\nInvalid patterns: {len(defects)}")
    for d in defects:
        print(f"  {d.rule_name}: {d.trigger} {d.pattern!r} ({d.error})")
    sys.exit(1)


def _cmd_serve(_args: argparse.Namespace) -> None:
    from skillcue.server.runner import run_server

    run_server()


def _cmd_mcp_serve(_args: argparse.Namespace) -> None:
    from skillcue.mcp_server.server import main as mcp_main

    mcp_main()


def _cmd_hook(args: argparse.Namespace) -> None:
    mod = importlib.import_module(f"skillcue.hooks.{args.module}")
    mod.main()


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="skillcue",
        description="Surface relevant Claude Code skills for a prompt",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"skillcue {__version__}"
    )
    _ = parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    # evaluate subcommand
    eval_p = subparsers.add_parser("evaluate", help="Match a prompt against skill rules")
    _ = eval_p.add_argument("prompt", help="Prompt text to evaluate")
    _ = eval_p.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        dest="files",
        help="File path in context (repeatable)",
    )
    _ = eval_p.add_argument("--rules", type=Path, default=None, help="Path to skill-rules.json")
    _ = eval_p.add_argument("--json", action="store_true", help="Print JSON instead of a report")

    # validate subcommand
    val_p = subparsers.add_parser("validate", help="Check that all rule patterns compile")
    _ = val_p.add_argument("--rules", type=Path, default=None, help="Path to skill-rules.json")

    # serve subcommand
    _ = subparsers.add_parser("serve", help="Start the HTTP API server")

    # mcp-serve subcommand
    _ = subparsers.add_parser("mcp-serve", help="Start the MCP stdio server")

    # hook subcommand
    hook_parser = subparsers.add_parser("hook", help="Run a hook module")
    _ = hook_parser.add_argument("module", help="Hook module name (e.g. skill_activation)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    dispatch = {
        "evaluate": _cmd_evaluate,
        "validate": _cmd_validate,
        "serve": _cmd_serve,
        "mcp-serve": _cmd_mcp_serve,
        "hook": _cmd_hook,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)
