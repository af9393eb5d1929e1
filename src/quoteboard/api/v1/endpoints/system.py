"""System endpoints for the Quoteboard API."""

from __future__ import annotations

from fastapi import APIRouter

from quoteboard.api.v1.dependencies import SiteConfigDep
from quoteboard.core.settings import settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config(site_config: SiteConfigDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; the ad fields are what the
    frontend needs to render placeholders.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "feed": {
            "page_size": settings.feed_page_size,
            "max_page_size": settings.feed_max_page_size,
            "view_delay_ms": settings.view_delay_ms,
        },
        "ads": site_config.model_dump(),
        "public_base_url": settings.public_base_url,
    }
