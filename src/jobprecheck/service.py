"""Pre-check entry paths used when JD text arrives."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Literal, Mapping

import pendulum
import structlog

from .core import PrecheckResult, run_eligibility_precheck
from .packs import RegionPackRegistry
from .schemas import PrecheckProfile, Rule, read_field
from . import __version__

PrecheckSource = Literal["job_card", "jd_snapshot"]
ProfileInput = PrecheckProfile | Mapping[str, Any] | None
ProfileLoader = Callable[[], ProfileInput]


@dataclass(slots=True)
class PrecheckRun:
    """Pre-check result with the entry path and pack it ran against."""

    source: PrecheckSource
    pack_key: str | None
    result: PrecheckResult


class PrecheckService:
    """Run the eligibility pre-check for JD text entering the system.

    Job-card creation and JD-snapshot creation go through the same code path.
    The pre-check is best effort: profile or rule lookup failures degrade to
    an unknown profile or an empty rule set, and audit write failures are
    logged, instead of propagating.
    """

    def __init__(
        self,
        *,
        registry: RegionPackRegistry,
        default_region: str | None = None,
        default_track: str | None = None,
        audit_logger: "AuditLogger | None" = None,
    ) -> None:
        self._registry = registry
        self._default_region = default_region
        self._default_track = default_track
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)

    def for_job_card(
        self,
        jd_text: str | None,
        *,
        profile: ProfileInput = None,
        profile_loader: ProfileLoader | None = None,
        region_code: str | None = None,
        track_code: str | None = None,
    ) -> PrecheckResult | None:
        return self.precheck(
            jd_text,
            source="job_card",
            profile=profile,
            profile_loader=profile_loader,
            region_code=region_code,
            track_code=track_code,
        )

    def for_jd_snapshot(
        self,
        snapshot_text: str | None,
        *,
        profile: ProfileInput = None,
        profile_loader: ProfileLoader | None = None,
        region_code: str | None = None,
        track_code: str | None = None,
    ) -> PrecheckResult | None:
        return self.precheck(
            snapshot_text,
            source="jd_snapshot",
            profile=profile,
            profile_loader=profile_loader,
            region_code=region_code,
            track_code=track_code,
        )

    def precheck(
        self,
        jd_text: str | None,
        *,
        source: PrecheckSource,
        profile: ProfileInput = None,
        profile_loader: ProfileLoader | None = None,
        region_code: str | None = None,
        track_code: str | None = None,
    ) -> PrecheckResult | None:
        """Return the pre-check result, or ``None`` when there is no JD text."""
        run = self.run(
            jd_text,
            source=source,
            profile=profile,
            profile_loader=profile_loader,
            region_code=region_code,
            track_code=track_code,
        )
        return run.result if run else None

    def run(
        self,
        jd_text: str | None,
        *,
        source: PrecheckSource,
        profile: ProfileInput = None,
        profile_loader: ProfileLoader | None = None,
        region_code: str | None = None,
        track_code: str | None = None,
    ) -> PrecheckRun | None:
        """Run the pre-check and report which pack it was resolved against."""
        if not jd_text or not jd_text.strip():
            return None

        if profile is None and profile_loader is not None:
            profile = self._load_profile(profile_loader, source)

        region, track = self.resolve_pack(profile, region_code, track_code)
        pack_key, rules = self._load_rules(region, track, source)
        result = run_eligibility_precheck(jd_text, profile, rules)

        self._logger.info(
            "precheck.result",
            source=source,
            pack=pack_key,
            status=result.status,
            triggered_rules=result.triggered_rule_ids,
        )
        if self._audit_logger:
            self._audit(
                {
                    "source": source,
                    "pack": pack_key,
                    "checked_at": pendulum.now("UTC").to_iso8601_string(),
                    **result.to_dict(),
                }
            )
        return PrecheckRun(source=source, pack_key=pack_key, result=result)

    def resolve_pack(
        self,
        profile: ProfileInput,
        region_code: str | None = None,
        track_code: str | None = None,
    ) -> tuple[str | None, str | None]:
        region = region_code or _profile_value(profile, "region_code", "regionCode") or self._default_region
        track = track_code or _profile_value(profile, "track_code", "trackCode") or self._default_track
        return region, track

    def _load_profile(self, loader: ProfileLoader, source: PrecheckSource) -> ProfileInput:
        try:
            return loader()
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("precheck.profile_unavailable", source=source, error=str(exc))
            return None

    def _load_rules(
        self,
        region: str | None,
        track: str | None,
        source: PrecheckSource,
    ) -> tuple[str | None, tuple[Rule, ...]]:
        try:
            return self._registry.lookup(region, track)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "precheck.rules_unavailable",
                source=source,
                region_code=region,
                track_code=track,
                error=str(exc),
            )
            return None, ()

    def _audit(self, record: dict[str, Any]) -> None:
        try:
            self._audit_logger.append(record)  # type: ignore[union-attr]
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("precheck.audit_failed", source=record["source"], error=str(exc))


def _profile_value(profile: Any, *keys: str) -> str | None:
    if profile is None:
        return None
    for key in keys:
        value = read_field(profile, key)
        if isinstance(value, str) and value:
            return value
    return None


class JDLoader:
    """Load job-description text from disk."""

    def load(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class ProfileFileLoader:
    """Load a profile record from a JSON file."""

    def load(self, path: Path) -> PrecheckProfile:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid profile JSON: {exc}") from exc
        return PrecheckProfile.model_validate(data)


class OutputWriter:
    """Persist pre-check reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def build_report(
    result: PrecheckResult,
    *,
    pack_key: str | None,
    source: PrecheckSource,
) -> dict[str, Any]:
    return {
        "metadata": {
            "pack": pack_key,
            "source": source,
            "checked_at": pendulum.now("UTC").to_iso8601_string(),
            "app_version": __version__,
        },
        "result": result.to_dict(),
    }


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
