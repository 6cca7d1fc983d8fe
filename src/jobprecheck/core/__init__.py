"""Core eligibility pre-check components."""

from __future__ import annotations

from .precheck import (
    SEVERITY,
    EligibilityPrecheck,
    PrecheckResult,
    PrecheckStatus,
    TriggeredRule,
    run_eligibility_precheck,
)

__all__ = [
    "SEVERITY",
    "EligibilityPrecheck",
    "PrecheckResult",
    "PrecheckStatus",
    "TriggeredRule",
    "run_eligibility_precheck",
]
