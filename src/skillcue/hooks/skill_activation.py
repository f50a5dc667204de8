"""UserPromptSubmit hook: surface skills whose triggers match the prompt.

Never blocks the prompt. Any configuration problem results in no output
and exit code 0; a match prints the activation report to stdout, which
Claude Code adds to the conversation context.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

from skillcue.config import CONFIG_FILENAME, load_activation_config
from skillcue.engine.loader import RuleFileError, filter_overridden, load_rule_set
from skillcue.engine.models import ActivationRequest
from skillcue.engine.ranking import activate
from skillcue.hooks._common import HookInput, get_project_root, read_hook_input
from skillcue.report import build_report

logger = logging.getLogger(__name__)


def build_request(hook_input: HookInput | dict[str, Any]) -> ActivationRequest:
    """Extract the prompt and in-context file paths from hook input."""
    if not isinstance(hook_input, HookInput):
        hook_input = HookInput.model_validate(hook_input)
    return ActivationRequest(prompt=hook_input.prompt, file_paths=hook_input.file_paths)


def run_activation(hook_input: HookInput | dict[str, Any], project_root: Path) -> str | None:
    """Load rules fresh, evaluate the request, and return the report text."""
    config = load_activation_config(project_root / CONFIG_FILENAME)
    if not config.enabled:
        return None

    request = build_request(hook_input)
    if not request.prompt and not request.file_paths:
        return None

    try:
        rules = load_rule_set(config.rules_path(project_root))
    except RuleFileError as e:
        logger.warning(f"Skill activation skipped: {e}")
        return None

    rules = filter_overridden(rules, os.environ)
    return build_report(activate(request, rules))


def main() -> None:
    """Entry point for UserPromptSubmit hook."""
    hook_input = read_hook_input()
    if hook_input is None:
        sys.exit(0)

    project_root = get_project_root(hook_input.cwd)
    report = run_activation(hook_input, project_root)
    if report:
        print(report)
    sys.exit(0)


if __name__ == "__main__":
    main()
