import logging
from typing import List, Optional

from pharmacy_api.ai_gateway import AIGateway, ChatCompletionProvider, FailureCounter
from pharmacy_api.cache import TTLCache
from pharmacy_api.config import Settings
from pharmacy_api.label_client import LabelClient
from pharmacy_api.services import (
    DrugChatService,
    DrugLookupService,
    DrugSearchService,
    InteractionService,
    SimilarDrugsService,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Centralized application service container for shared singletons."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

        self.label_client: Optional[LabelClient] = None
        self.providers: List[ChatCompletionProvider] = []
        self.failure_counter: Optional[FailureCounter] = None
        self.drug_cache: Optional[TTLCache] = None
        self.translation_cache: Optional[TTLCache] = None
        self.gateway: Optional[AIGateway] = None
        self.lookup_service: Optional[DrugLookupService] = None
        self.search_service: Optional[DrugSearchService] = None
        self.interaction_service: Optional[InteractionService] = None
        self.chat_service: Optional[DrugChatService] = None
        self.similar_service: Optional[SimilarDrugsService] = None

    async def startup(self) -> None:
        settings = self.settings

        logger.info("Loading label client...")
        self.label_client = LabelClient(
            settings.fda_label_url,
            timeout=settings.fda_timeout_seconds,
            verify_tls=settings.fda_verify_tls,
        )

        logger.info("Loading AI gateway...")
        self.providers = [
            ChatCompletionProvider(provider, timeout=settings.ai_timeout_seconds)
            for provider in settings.providers
        ]
        self.failure_counter = FailureCounter(
            threshold=settings.ai_failure_threshold,
            window_seconds=settings.ai_failure_window_seconds,
        )
        self.drug_cache = TTLCache(settings.drug_cache_ttl_seconds)
        self.translation_cache = TTLCache(settings.translation_cache_ttl_seconds)
        self.gateway = AIGateway(self.providers, self.failure_counter, self.translation_cache)

        logger.info("Initializing drug services...")
        self.lookup_service = DrugLookupService(self.label_client, self.gateway, self.drug_cache)
        self.search_service = DrugSearchService(self.label_client)
        self.interaction_service = InteractionService(self.label_client, self.gateway)
        self.chat_service = DrugChatService(self.gateway)
        self.similar_service = SimilarDrugsService(self.label_client)

        available = [provider.name for provider in self.providers if provider.available]
        logger.info(f"Service container initialized (AI providers: {', '.join(available) or 'none'})")

    async def shutdown(self) -> None:
        if self.label_client:
            await self.label_client.aclose()
        if self.gateway:
            await self.gateway.aclose()
