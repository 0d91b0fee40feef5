from fastapi import APIRouter, Depends, Request

from pharmacy_api.di import get_chat_service
from pharmacy_api.models import ChatRequest, ChatResponse
from pharmacy_api.services import DrugChatService
from pharmacy_api.utils.logging_utils import log_info

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def drug_chat(
    request: Request,
    payload: ChatRequest,
    chat_service: DrugChatService = Depends(get_chat_service),
):
    """
    Ask the pharmacist assistant a question about one drug, answered from its label.
    """
    result = await chat_service.ask(payload.message, payload.drugName, payload.context)
    log_info(
        "Drug chat",
        request=request,
        drug=payload.drugName,
        question_length=len(payload.message),
        ok=result["ok"],
    )
    return result
