from fastapi import APIRouter, Depends, Request

from pharmacy_api.di import ServiceContainer, get_container
from pharmacy_api.models import CacheClearResponse, StatusResponse
from pharmacy_api.utils.logging_utils import log_info

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
async def service_status(container: ServiceContainer = Depends(get_container)):
    """
    Provider failure counts and cache statistics.

    ``ai_available`` is false while requests are skipping AI because a
    provider crossed the failure threshold.
    """
    gateway = container.gateway
    ai_available = gateway is not None and not gateway.should_skip_ai()
    return {
        "status": "healthy" if ai_available else "degraded",
        "ai_available": ai_available,
        "provider_failures": gateway.provider_failures() if gateway else {},
        "drug_cache": container.drug_cache.get_stats() if container.drug_cache else {},
        "translation_cache": container.translation_cache.get_stats() if container.translation_cache else {},
    }


@router.post("/cache/clear", response_model=CacheClearResponse)
async def clear_caches(request: Request, container: ServiceContainer = Depends(get_container)):
    """Drop every cached drug summary and translation."""
    drug_entries = container.drug_cache.clear() if container.drug_cache else 0
    translation_entries = container.translation_cache.clear() if container.translation_cache else 0
    log_info(
        "Caches cleared",
        request=request,
        drug_entries=drug_entries,
        translation_entries=translation_entries,
    )
    return {
        "status": "cleared",
        "drug_cache_entries_cleared": drug_entries,
        "translation_cache_entries_cleared": translation_entries,
    }
