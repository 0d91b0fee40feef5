"""Drug search with regional-name retry and suggestions."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from pharmacy_api.label_client import LabelClient, to_card
from pharmacy_api.name_resolution import normalize_name, resolve, suggest
from pharmacy_api.sanitizer import SEARCH_RESPONSE_SCHEMA, sanitize
from pharmacy_api.utils.i18n import translate

logger = logging.getLogger(__name__)


def unique_cards(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Map records to cards, dropping repeated ids."""
    cards: List[Dict[str, Any]] = []
    seen = set()
    for record in records:
        card = to_card(record)
        if card["id"] and card["id"] in seen:
            continue
        seen.add(card["id"])
        cards.append(card)
    return cards


@dataclass
class DrugSearchService:
    label_client: LabelClient
    result_limit: int = 10

    async def search(self, query: str, language: str) -> Dict[str, Any]:
        term = (query or "").strip()
        if not term:
            return sanitize({"drugs": []}, SEARCH_RESPONSE_SCHEMA)

        response: Dict[str, Any] = {}
        records = await self.label_client.search_labels(term, limit=self.result_limit)

        if not records:
            resolved = resolve(term)
            if resolved and normalize_name(resolved) != normalize_name(term):
                logger.info("Search for %r empty, retrying with %r", term, resolved)
                records = await self.label_client.search_labels(resolved, limit=self.result_limit)
                if records:
                    response["translationInfo"] = {
                        "original": term,
                        "translated": resolved,
                        "message": translate("search.translated", language, translated=resolved, original=term),
                    }

        if not records:
            response["suggestions"] = suggest(term)
            response["message"] = translate("search.no_results", language, query=term)

        response["drugs"] = unique_cards(records)
        return sanitize(response, SEARCH_RESPONSE_SCHEMA)
