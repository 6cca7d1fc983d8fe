"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class PrecheckConfig(BaseModel):
    default_region: str | None = None
    default_track: str | None = None

    model_config = ConfigDict(extra="forbid")


class PacksConfig(BaseModel):
    path: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    precheck: PrecheckConfig = Field(default_factory=PrecheckConfig)
    packs: PacksConfig = Field(default_factory=PacksConfig)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        precheck_settings = self.precheck.model_dump(exclude_none=True)
        if precheck_settings:
            settings["precheck"] = precheck_settings
        packs_settings = self.packs.model_dump(exclude_none=True)
        if packs_settings:
            settings["packs"] = packs_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
