from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from pharmacy_api.di import get_interaction_service
from pharmacy_api.models import InteractionRequest, InteractionResponse
from pharmacy_api.services import InteractionService
from pharmacy_api.utils.error_responses import get_correlation_id
from pharmacy_api.utils.logging_utils import log_error, log_info

router = APIRouter()


@router.post("/interactions", response_model=InteractionResponse)
async def check_interactions(
    request: Request,
    payload: InteractionRequest,
    interaction_service: InteractionService = Depends(get_interaction_service),
):
    """
    Check two or more drugs for interactions.

    Unexpected failures still return a displayable result with
    overallRisk "error" so the client can render the localized message.
    """
    correlation_id = get_correlation_id(request)
    try:
        result = await interaction_service.check(payload.drugs)
    except Exception as exc:
        log_error(
            "Interaction check failed",
            correlation_id=correlation_id,
            exc_info=True,
            drugs=payload.drugs,
            error=str(exc),
        )
        content = InteractionService.error_result()
        content["correlation_id"] = correlation_id
        return JSONResponse(status_code=500, content=content)

    log_info(
        "Interaction check",
        correlation_id=correlation_id,
        drugs=len(payload.drugs),
        interactions=len(result["interactions"]),
        overall_risk=result["overallRisk"],
    )
    return result
