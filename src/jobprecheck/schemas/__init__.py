"""Pydantic schema definitions for rules, profiles and configuration."""

from __future__ import annotations

from .profile import UNKNOWN, PrecheckProfile, ResolvedProfile, read_field, resolve_profile
from .rules import Condition, ConditionOutcome, Rule, parse_condition

__all__ = [
    "UNKNOWN",
    "Condition",
    "ConditionOutcome",
    "PrecheckProfile",
    "ResolvedProfile",
    "Rule",
    "parse_condition",
    "read_field",
    "resolve_profile",
]
