from .container import ServiceContainer
from .deps import (
    get_chat_service,
    get_container,
    get_interaction_service,
    get_lookup_service,
    get_search_service,
    get_similar_service,
)

__all__ = [
    "ServiceContainer",
    "get_container",
    "get_lookup_service",
    "get_search_service",
    "get_interaction_service",
    "get_chat_service",
    "get_similar_service",
]
