"""Candidate work-authorization profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ResolvedProfile:
    """Profile fields with every missing value replaced by ``"unknown"``."""

    work_status: str = UNKNOWN
    needs_sponsorship: str = UNKNOWN
    country_of_residence: str = UNKNOWN

    def get(self, field_name: str) -> str:
        return getattr(self, field_name)


class PrecheckProfile(BaseModel):
    """Subset of the user profile consumed by the eligibility pre-check."""

    work_status: str | None = Field(
        default=None,
        validation_alias=AliasChoices("work_status", "workStatus"),
    )
    needs_sponsorship: str | None = Field(
        default=None,
        validation_alias=AliasChoices("needs_sponsorship", "needsSponsorship"),
    )
    country_of_residence: str | None = Field(
        default=None,
        validation_alias=AliasChoices("country_of_residence", "countryOfResidence"),
    )
    region_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("region_code", "regionCode"),
    )
    track_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("track_code", "trackCode"),
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("needs_sponsorship", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

    def resolve(self) -> ResolvedProfile:
        return ResolvedProfile(
            work_status=_or_unknown(self.work_status),
            needs_sponsorship=_or_unknown(self.needs_sponsorship),
            country_of_residence=_or_unknown(self.country_of_residence),
        )


def resolve_profile(profile: PrecheckProfile | Mapping[str, Any] | None) -> ResolvedProfile:
    """Resolve an optional profile or raw profile record.

    Mappings and record objects (ORM rows, dataclasses) are read leniently:
    unrecognised keys are ignored and values of the wrong type are treated as
    missing, so resolution never raises.
    """
    if profile is None:
        return ResolvedProfile()
    if isinstance(profile, PrecheckProfile):
        return profile.resolve()

    def pick(*keys: str) -> str:
        for key in keys:
            value = read_field(profile, key)
            if isinstance(value, bool):
                return "true" if value else "false"
            if isinstance(value, str):
                return _or_unknown(value)
        return UNKNOWN

    return ResolvedProfile(
        work_status=pick("work_status", "workStatus"),
        needs_sponsorship=pick("needs_sponsorship", "needsSponsorship"),
        country_of_residence=pick("country_of_residence", "countryOfResidence"),
    )


def read_field(record: Any, key: str) -> Any:
    """Read ``key`` from a mapping or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _or_unknown(value: str | None) -> str:
    if value is None or not value.strip():
        return UNKNOWN
    return value
