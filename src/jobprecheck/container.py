"""Dependency injection container for the pre-check service."""

from __future__ import annotations

from dependency_injector import containers, providers

from .packs import create_registry
from .service import PrecheckService


class PrecheckContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    registry = providers.Singleton(
        create_registry,
        packs_path=config.packs.path,
        default_region=config.precheck.default_region,
        default_track=config.precheck.default_track,
    )

    audit_logger = providers.Object(None)

    service = providers.Factory(
        PrecheckService,
        registry=registry,
        default_region=config.precheck.default_region,
        default_track=config.precheck.default_track,
        audit_logger=audit_logger,
    )


def create_container(*, settings: dict | None = None) -> PrecheckContainer:
    """Instantiate container with optional overrides."""

    container = PrecheckContainer()

    if not settings or not isinstance(settings, dict):
        return container

    container.config.from_dict(
        {
            "precheck": settings.get("precheck", {}),
            "packs": settings.get("packs", {}),
        }
    )
    return container
