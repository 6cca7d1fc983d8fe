"""Eligibility pre-check engine.

Scans job-description text for the trigger phrases of each rule and checks
the rule's condition against the candidate profile:

- ``conflict``: a rule triggered and the known profile confirms its condition
- ``recommended``: a rule triggered but no conflict could be confirmed
- ``none``: no trigger phrase found

The engine is pure: it reads nothing but its arguments and never raises for
well-formed rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping

from ..schemas import PrecheckProfile, Rule, resolve_profile

PrecheckStatus = Literal["none", "recommended", "conflict"]

SEVERITY: dict[PrecheckStatus, int] = {
    "none": 0,
    "recommended": 1,
    "conflict": 2,
}


@dataclass(frozen=True, slots=True)
class TriggeredRule:
    """Rule whose trigger phrase was found in the JD."""

    rule_id: str
    title: str


@dataclass(slots=True)
class PrecheckResult:
    """Verdict plus the rules that fired, in rule-set order."""

    status: PrecheckStatus = "none"
    triggered_rules: list[TriggeredRule] = field(default_factory=list)

    @property
    def triggered_rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self.triggered_rules]

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "triggeredRules": [
                {"ruleId": rule.rule_id, "title": rule.title}
                for rule in self.triggered_rules
            ],
        }


def run_eligibility_precheck(
    jd_text: str,
    profile: PrecheckProfile | Mapping[str, Any] | None,
    rules: Iterable[Rule | Mapping[str, Any]],
) -> PrecheckResult:
    """Run the pre-check for ``jd_text`` against ``profile`` and ``rules``."""
    if not jd_text:
        return PrecheckResult()
    rule_list = [_as_rule(rule) for rule in rules or ()]
    if not rule_list:
        return PrecheckResult()

    jd_lower = jd_text.lower()
    resolved = resolve_profile(profile)

    status: PrecheckStatus = "none"
    triggered: list[TriggeredRule] = []
    for rule in rule_list:
        if not rule.matches(jd_lower):
            continue
        triggered.append(TriggeredRule(rule_id=rule.id, title=rule.title))
        outcome = rule.evaluate(resolved)
        rule_status: PrecheckStatus = "conflict" if outcome == "hard_true" else "recommended"
        if SEVERITY[rule_status] > SEVERITY[status]:
            status = rule_status

    return PrecheckResult(status=status, triggered_rules=triggered)


class EligibilityPrecheck:
    """Callable wrapper binding a fixed rule set to the engine."""

    def __init__(self, rules: Iterable[Rule | Mapping[str, Any]] = ()) -> None:
        self._rules = tuple(_as_rule(rule) for rule in rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __call__(
        self,
        jd_text: str,
        profile: PrecheckProfile | Mapping[str, Any] | None = None,
    ) -> PrecheckResult:
        return run_eligibility_precheck(jd_text, profile, self._rules)


def _as_rule(rule: Rule | Mapping[str, Any]) -> Rule:
    if isinstance(rule, Rule):
        return rule
    return Rule.model_validate(rule)
