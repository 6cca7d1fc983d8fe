"""Region pack registry keyed by region and track code."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import structlog
import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)

from ..schemas import Rule
from .builtin import BUILTIN_PACKS, DEFAULT_REGION, DEFAULT_TRACK


def pack_key(region_code: str, track_code: str) -> str:
    return f"{region_code}_{track_code}"


class RegionPack(BaseModel):
    """Per-market bundle of work-authorization rules."""

    region_code: str = Field(validation_alias=AliasChoices("region_code", "regionCode"))
    track_code: str = Field(validation_alias=AliasChoices("track_code", "trackCode"))
    label: str
    work_auth_rules: list[Rule] = Field(
        default_factory=list,
        validation_alias=AliasChoices("work_auth_rules", "workAuthRules"),
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="after")
    def _unique_rule_ids(self) -> "RegionPack":
        seen: set[str] = set()
        for rule in self.work_auth_rules:
            if rule.id in seen:
                raise ValueError(f"duplicate rule id {rule.id!r} in pack {self.key}")
            seen.add(rule.id)
        return self

    @property
    def key(self) -> str:
        return pack_key(self.region_code, self.track_code)


class PackLoadError(ValueError):
    """Raised when a packs file contains invalid pack definitions."""

    def __init__(self, errors: list[str], partial: list[RegionPack]):
        super().__init__("Region pack loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Region pack loading failed: {self.errors}"


class RegionPackRegistry:
    """Read-only registry of region packs with a default fallback."""

    def __init__(
        self,
        packs: Iterable[RegionPack],
        *,
        default_region: str = DEFAULT_REGION,
        default_track: str = DEFAULT_TRACK,
    ) -> None:
        self._packs: dict[str, RegionPack] = {}
        for pack in packs:
            self._packs[pack.key] = pack
        self._default_key = pack_key(default_region, default_track)
        if self._default_key not in self._packs:
            raise KeyError(f"Default pack {self._default_key!r} is not registered")
        self._rules = {key: tuple(pack.work_auth_rules) for key, pack in self._packs.items()}
        self._logger = structlog.get_logger(__name__)

    @property
    def default_key(self) -> str:
        return self._default_key

    def get(self, region_code: str | None, track_code: str | None) -> RegionPack:
        key = pack_key(region_code or "", track_code or "")
        pack = self._packs.get(key)
        if pack is None:
            self._logger.info("packs.fallback", requested=key, fallback=self._default_key)
            return self._packs[self._default_key]
        return pack

    def lookup(self, region_code: str | None, track_code: str | None) -> tuple[str, tuple[Rule, ...]]:
        """Return the resolved pack key together with its rules."""
        key = self.get(region_code, track_code).key
        return key, self._rules[key]

    def rules_for(self, region_code: str | None, track_code: str | None) -> tuple[Rule, ...]:
        return self.lookup(region_code, track_code)[1]

    def available(self) -> list[dict[str, str]]:
        return [{"key": key, "label": pack.label} for key, pack in self._packs.items()]

    def __contains__(self, key: object) -> bool:
        return key in self._packs

    def __len__(self) -> int:
        return len(self._packs)


def builtin_packs() -> list[RegionPack]:
    return [RegionPack.model_validate(pack) for pack in BUILTIN_PACKS]


def load_packs_file(path: Path) -> list[RegionPack]:
    """Load region packs from a YAML document with a top-level ``packs`` list."""
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    raw_packs = loaded.get("packs") if isinstance(loaded, dict) else None
    if not isinstance(raw_packs, list):
        raise PackLoadError([f"{path}: expected a top-level 'packs' list"], [])

    packs: list[RegionPack] = []
    errors: list[str] = []
    for idx, raw in enumerate(raw_packs):
        try:
            packs.append(RegionPack.model_validate(raw))
        except ValidationError as exc:
            errors.append(f"pack {idx}: {exc}")
    if errors:
        raise PackLoadError(errors, packs)
    return packs


def create_registry(
    *,
    packs_path: str | Path | None = None,
    default_region: str | None = None,
    default_track: str | None = None,
) -> RegionPackRegistry:
    """Build a registry from the built-in packs plus an optional packs file."""
    packs = builtin_packs()
    if packs_path:
        packs.extend(load_packs_file(Path(packs_path)))
    return RegionPackRegistry(
        packs,
        default_region=default_region or DEFAULT_REGION,
        default_track=default_track or DEFAULT_TRACK,
    )


__all__ = [
    "DEFAULT_REGION",
    "DEFAULT_TRACK",
    "PackLoadError",
    "RegionPack",
    "RegionPackRegistry",
    "builtin_packs",
    "create_registry",
    "load_packs_file",
    "pack_key",
]
