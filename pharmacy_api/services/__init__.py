"""Service layer: one class per handler, wired together by the DI container."""

from .drug_chat import DrugChatService
from .drug_lookup import DrugLookupService
from .drug_search import DrugSearchService
from .interactions import InteractionService
from .similar_drugs import SimilarDrugsService

__all__ = [
    "DrugChatService",
    "DrugLookupService",
    "DrugSearchService",
    "InteractionService",
    "SimilarDrugsService",
]
