"""Declarative eligibility rules and their condition expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal, get_args

import structlog
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
)

from .profile import UNKNOWN, ResolvedProfile

ProfileField = Literal["work_status", "needs_sponsorship", "country_of_residence"]
Operator = Literal["==", "!="]
ConditionOutcome = Literal["hard_true", "hard_false", "indeterminate"]

PROFILE_FIELDS: tuple[str, ...] = get_args(ProfileField)

_CONDITION_PATTERN = re.compile(r"^\s*([A-Za-z_]+)\s*(==|!=)\s*([^\s=](?:.*\S)?)\s*$")

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Condition:
    """Parsed ``<field> <op> <value>`` condition over one profile field."""

    field: ProfileField
    op: Operator
    value: str

    @classmethod
    def parse(cls, text: Any) -> "Condition | None":
        """Return the parsed condition, or ``None`` when ``text`` is malformed."""
        if not isinstance(text, str):
            return None
        match = _CONDITION_PATTERN.match(text)
        if match is None:
            return None
        field_name, op, value = match.groups()
        if field_name not in PROFILE_FIELDS:
            return None
        return cls(field=field_name, op=op, value=value)  # type: ignore[arg-type]

    def evaluate(self, profile: ResolvedProfile) -> ConditionOutcome:
        actual = profile.get(self.field)
        if actual == UNKNOWN:
            return "indeterminate"
        if self.op == "==":
            holds = actual == self.value
        else:
            holds = actual != self.value
        return "hard_true" if holds else "hard_false"

    def __str__(self) -> str:
        return f"{self.field} {self.op} {self.value}"


def parse_condition(text: Any) -> Condition | None:
    return Condition.parse(text)


class Rule(BaseModel):
    """Work-authorization rule loaded from a region pack.

    ``condition`` is parsed once at construction. A condition that cannot be
    parsed is kept as given, logged, and treated as never hard-true.
    """

    id: str = Field(min_length=1)
    label: str = Field(validation_alias=AliasChoices("label", "title"))
    trigger_phrases: list[str] = Field(
        min_length=1,
        validation_alias=AliasChoices("trigger_phrases", "triggerPhrases"),
    )
    condition: Any = None
    message: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    _parsed: Condition | None = PrivateAttr(default=None)

    @field_validator("trigger_phrases")
    @classmethod
    def _phrases_not_blank(cls, value: list[str]) -> list[str]:
        if any(not phrase.strip() for phrase in value):
            raise ValueError("trigger phrases must not be blank")
        return value

    def model_post_init(self, __context: Any) -> None:
        self._parsed = Condition.parse(self.condition)
        if self._parsed is None:
            _logger.warning(
                "rule.condition_malformed",
                rule_id=self.id,
                condition=self.condition,
            )

    @property
    def title(self) -> str:
        return self.label

    @property
    def parsed_condition(self) -> Condition | None:
        return self._parsed

    def matches(self, haystack_lower: str) -> bool:
        """True if any trigger phrase occurs in the already lower-cased text."""
        return any(phrase.lower() in haystack_lower for phrase in self.trigger_phrases)

    def evaluate(self, profile: ResolvedProfile) -> ConditionOutcome:
        if self._parsed is None:
            return "hard_false"
        return self._parsed.evaluate(profile)
