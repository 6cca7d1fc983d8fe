"""Built-in region packs."""

from __future__ import annotations

from typing import Any

# Shared by every Canadian track.
CA_WORK_AUTH_RULES: list[dict[str, Any]] = [
    {
        "id": "citizen_pr_requirement",
        "label": "Citizen/PR Requirement",
        "trigger_phrases": [
            "canadian citizen",
            "permanent resident",
            "pr required",
            "citizen or pr",
            "must be citizen",
            "must be pr",
        ],
        "condition": "work_status != citizen_pr",
        "penalty": -35,
        "message": "Posting asks for Citizen/PR. If you're not sure, confirm with recruiter.",
    },
    {
        "id": "no_sponsorship",
        "label": "No Sponsorship Available",
        "trigger_phrases": [
            "no sponsorship",
            "without sponsorship",
            "sponsorship not available",
            "sponsorship not provided",
        ],
        "condition": "needs_sponsorship == true",
        "penalty": -35,
        "message": "Posting says no sponsorship. Consider prioritizing other roles or confirming directly.",
    },
    {
        "id": "work_authorization_unclear",
        "label": "Work Authorization Status",
        "trigger_phrases": [
            "legally authorized to work in canada",
            "authorized to work in canada",
            "legally entitled to work",
        ],
        "condition": "work_status == unknown",
        "penalty": -10,
        "message": "Posting may screen for work authorization. Add your status to reduce uncertainty.",
    },
    {
        "id": "location_requirement",
        "label": "Location Requirement",
        "trigger_phrases": [
            "must be located in canada",
            "must reside in canada",
            "canada-based",
            "based in canada",
        ],
        "condition": "country_of_residence != Canada",
        "penalty": -15,
        "message": "Posting mentions location requirement. Confirm if remote/relocation is possible.",
    },
]

BUILTIN_PACKS: list[dict[str, Any]] = [
    {
        "region_code": "CA",
        "track_code": "COOP",
        "label": "Canada — Co-op",
        "work_auth_rules": CA_WORK_AUTH_RULES,
    },
    {
        "region_code": "CA",
        "track_code": "NEW_GRAD",
        "label": "Canada — New Graduate",
        "work_auth_rules": CA_WORK_AUTH_RULES,
    },
]

DEFAULT_REGION = "CA"
DEFAULT_TRACK = "NEW_GRAD"
