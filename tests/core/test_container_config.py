from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jobprecheck.container import create_container
from jobprecheck.schemas.config import AppConfig, load_config
from jobprecheck.service import PrecheckService


def test_create_container_defaults():
    container = create_container()

    registry = container.registry()
    service = container.service()

    assert isinstance(service, PrecheckService)
    assert registry.default_key == "CA_NEW_GRAD"
    assert container.registry() is registry


def test_create_container_with_overrides(tmp_path: Path):
    packs_path = tmp_path / "packs.yaml"
    packs_path.write_text(
        "packs:\n"
        "  - region_code: US\n"
        "    track_code: NEW_GRAD\n"
        "    label: United States\n"
        "    work_auth_rules: []\n",
        encoding="utf-8",
    )

    container = create_container(
        settings={
            "precheck": {"default_region": "US", "default_track": "NEW_GRAD"},
            "packs": {"path": str(packs_path)},
        }
    )

    registry = container.registry()
    service = container.service()

    assert registry.default_key == "US_NEW_GRAD"
    assert service.resolve_pack(None) == ("US", "NEW_GRAD")


def test_load_config_validation():
    data = {
        "precheck": {"default_region": "CA", "default_track": "COOP"},
        "packs": {"path": "extra_packs.yaml"},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["precheck"] == {"default_region": "CA", "default_track": "COOP"}
    assert settings["packs"]["path"] == "extra_packs.yaml"


def test_empty_config_produces_no_settings():
    assert load_config({}).to_settings() == {}


@pytest.mark.parametrize("raw", [["not", "a", "mapping"], {"precheck": {"default_region": "CA", "bogus": 1}}])
def test_load_config_rejects_invalid_input(raw):
    with pytest.raises(ValidationError):
        load_config(raw)
