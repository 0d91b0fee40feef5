from fastapi import APIRouter, Depends, Request

from pharmacy_api.di import get_lookup_service, get_search_service, get_similar_service
from pharmacy_api.models import (
    LookupRequest,
    LookupResponse,
    SearchRequest,
    SearchResponse,
    SimilarRequest,
    SimilarResponse,
)
from pharmacy_api.services import DrugLookupService, DrugSearchService, SimilarDrugsService
from pharmacy_api.utils.logging_utils import log_info, log_structured

router = APIRouter()


@router.post("/lookup", response_model=LookupResponse, response_model_exclude_none=True)
async def lookup_drug(
    request: Request,
    payload: LookupRequest,
    lookup_service: DrugLookupService = Depends(get_lookup_service),
):
    """
    Full drug details: AI summaries plus raw label sections in the requested language.
    """
    result = await lookup_service.lookup(payload.search_term, payload.language)
    log_structured(
        level="info",
        message="Drug lookup",
        request=request,
        drug=payload.search_term,
        language=payload.language,
        found=result["found"],
        cached=result["cached"],
    )
    return result


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search_drugs(
    request: Request,
    payload: SearchRequest,
    search_service: DrugSearchService = Depends(get_search_service),
):
    """Search labels by brand or generic name prefix."""
    result = await search_service.search(payload.query, payload.language)
    log_info(
        "Drug search",
        request=request,
        query=payload.query,
        results=len(result["drugs"]),
        translated="translationInfo" in result,
    )
    return result


@router.post("/similar", response_model=SimilarResponse)
async def similar_drugs(
    request: Request,
    payload: SimilarRequest,
    similar_service: SimilarDrugsService = Depends(get_similar_service),
):
    result = await similar_service.find(payload.drugName, payload.category, payload.limit)
    log_info(
        "Similar drugs",
        request=request,
        drug=payload.drugName,
        similar=len(result["similar"]),
        alternatives=len(result["alternatives"]),
    )
    return result
