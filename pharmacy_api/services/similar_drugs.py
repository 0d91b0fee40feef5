"""Similar drugs (same pharmacologic class) and therapeutic alternatives."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pharmacy_api.label_client import LabelClient, names_in, to_card
from pharmacy_api.name_resolution import alternatives_for, normalize_name
from pharmacy_api.sanitizer import SIMILAR_RESPONSE_SCHEMA, sanitize

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 4
MIN_SIMILAR = 3

_DOSE = re.compile(r"\d+\s*mg", re.IGNORECASE)


def name_patterns(drug_name: str) -> List[str]:
    """Generic-name search patterns, most specific last, without repeats."""
    lowered = normalize_name(drug_name)
    candidates = [lowered.split(" ")[0], normalize_name(_DOSE.sub("", lowered)), lowered]
    patterns: List[str] = []
    for candidate in candidates:
        if candidate and candidate not in patterns:
            patterns.append(candidate)
    return patterns


@dataclass
class SimilarDrugsService:
    label_client: LabelClient

    @staticmethod
    def _is_same_drug(record: Dict[str, Any], drug_name: str) -> bool:
        return normalize_name(drug_name) in names_in(record)

    async def _similar(self, drug_name: str, category: Optional[str], limit: int) -> List[Dict[str, Any]]:
        similar: List[Dict[str, Any]] = []

        def add(records: List[Dict[str, Any]]) -> None:
            known = {card["id"] for card in similar}
            for record in records:
                if self._is_same_drug(record, drug_name):
                    continue
                card = to_card(record)
                if card["id"] in known:
                    continue
                known.add(card["id"])
                similar.append(card)

        if category:
            add(await self.label_client.search_by_class(category, limit=limit))

        if len(similar) < MIN_SIMILAR:
            for pattern in name_patterns(drug_name):
                if len(similar) >= limit:
                    break
                add(await self.label_client.fetch_label(pattern, exact=False, limit=limit - len(similar)))

        return similar[:limit]

    async def _alternatives(self, drug_name: str) -> List[Dict[str, Any]]:
        names = alternatives_for(drug_name)[:MAX_ALTERNATIVES]
        results = await asyncio.gather(
            *(self.label_client.fetch_label(name, exact=True, limit=1) for name in names)
        )
        return [to_card(records[0]) for records in results if records]

    async def find(self, drug_name: str, category: Optional[str] = None, limit: int = 8) -> Dict[str, Any]:
        """
        Drugs related to ``drug_name``.

        Returns:
            {similar, alternatives} lists of cards
        """
        if not (drug_name or "").strip():
            return sanitize({}, SIMILAR_RESPONSE_SCHEMA)

        similar, alternatives = await asyncio.gather(
            self._similar(drug_name, category, limit),
            self._alternatives(drug_name),
        )
        logger.debug("Similar to %r: %d similar, %d alternatives", drug_name, len(similar), len(alternatives))
        return sanitize({"similar": similar, "alternatives": alternatives}, SIMILAR_RESPONSE_SCHEMA)
