from fastapi import Depends, Request

from pharmacy_api.services import (
    DrugChatService,
    DrugLookupService,
    DrugSearchService,
    InteractionService,
    SimilarDrugsService,
)
from .container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Service container not initialized")
    return container


def get_lookup_service(
    container: ServiceContainer = Depends(get_container),
) -> DrugLookupService:
    service = container.lookup_service
    if service is None:
        raise RuntimeError("Lookup service not initialized")
    return service


def get_search_service(
    container: ServiceContainer = Depends(get_container),
) -> DrugSearchService:
    service = container.search_service
    if service is None:
        raise RuntimeError("Search service not initialized")
    return service


def get_interaction_service(
    container: ServiceContainer = Depends(get_container),
) -> InteractionService:
    service = container.interaction_service
    if service is None:
        raise RuntimeError("Interaction service not initialized")
    return service


def get_chat_service(container: ServiceContainer = Depends(get_container)) -> DrugChatService:
    service = container.chat_service
    if service is None:
        raise RuntimeError("Chat service not initialized")
    return service


def get_similar_service(
    container: ServiceContainer = Depends(get_container),
) -> SimilarDrugsService:
    service = container.similar_service
    if service is None:
        raise RuntimeError("Similar drugs service not initialized")
    return service
