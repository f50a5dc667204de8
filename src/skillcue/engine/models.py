"""Pydantic models and enums for the skill activation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RuleKind(StrEnum):
    GUARDRAIL = "guardrail"
    DOMAIN = "domain"


class Enforcement(StrEnum):
    BLOCK = "block"
    SUGGEST = "suggest"
    WARN = "warn"


class Priority(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[str, int] = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class MatchKind(StrEnum):
    KEYWORD = "keyword"
    INTENT = "intent"
    FILE_PATH = "file_path"


class PromptTriggers(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    keywords: list[str] = Field(default_factory=list)
    intent_patterns: list[str] = Field(default_factory=list, alias="intentPatterns")


class FileTriggers(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path_patterns: list[str] = Field(default_factory=list, alias="pathPatterns")
    path_exclusions: list[str] = Field(default_factory=list, alias="pathExclusions")


class SkipConditions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    env_override: str | None = Field(default=None, alias="envOverride")


class SkillRule(BaseModel):
    """One configured skill and the triggers that surface it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    kind: RuleKind = Field(default=RuleKind.DOMAIN, alias="type")
    enforcement: Enforcement = Enforcement.SUGGEST
    priority: Priority = Priority.MEDIUM
    description: str = ""
    prompt_triggers: PromptTriggers | None = Field(default=None, alias="promptTriggers")
    file_triggers: FileTriggers | None = Field(default=None, alias="fileTriggers")
    # Passed through to the report for block-enforced rules
    block_message: str | None = Field(default=None, alias="blockMessage")
    skip_conditions: SkipConditions | None = Field(default=None, alias="skipConditions")

    @property
    def has_triggers(self) -> bool:
        return self.prompt_triggers is not None or self.file_triggers is not None


class SkillRuleSet(BaseModel):
    """The full rule file: rule name -> rule, in file order."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    skills: dict[str, SkillRule] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fill_rule_names(cls, data):
        if isinstance(data, dict) and isinstance(data.get("skills"), dict):
            skills: dict[str, object] = {}
            for name, rule in data["skills"].items():
                if isinstance(rule, dict) and not rule.get("name"):
                    rule = {**rule, "name": name}
                skills[name] = rule
            data = {**data, "skills": skills}
        return data

    def __len__(self) -> int:
        return len(self.skills)


class ActivationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    prompt: str = ""
    file_paths: list[str] = Field(default_factory=list, alias="filePaths")


class SkillMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: SkillRule
    match_kind: MatchKind
    evidence: str


class PatternDefect(BaseModel):
    """A pattern that failed to compile; the rest of the rule still runs."""

    model_config = ConfigDict(frozen=True)

    rule_name: str
    pattern: str
    trigger: str  # "intent" | "path" | "exclusion"
    error: str = ""


@dataclass
class Evaluation:
    """Result of one pass over a rule set."""

    matches: list[SkillMatch] = field(default_factory=list)
    defects: list[PatternDefect] = field(default_factory=list)


class ActivationResult(BaseModel):
    """Matches partitioned into priority tiers, each in rule-set order."""

    critical: list[SkillMatch] = Field(default_factory=list)
    high: list[SkillMatch] = Field(default_factory=list)
    medium: list[SkillMatch] = Field(default_factory=list)
    low: list[SkillMatch] = Field(default_factory=list)

    def tier(self, priority: Priority | str) -> list[SkillMatch]:
        return getattr(self, Priority(priority).value)

    @property
    def matches(self) -> list[SkillMatch]:
        return self.critical + self.high + self.medium + self.low

    @property
    def count(self) -> int:
        return len(self.matches)
