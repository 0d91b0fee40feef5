"""Multi-drug interaction check: AI cross-reference with a static rule-table fallback."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pharmacy_api import interaction_rules
from pharmacy_api.ai_gateway import AIGateway
from pharmacy_api.label_client import LabelClient, names_in, section_text
from pharmacy_api.models import Severity, highest_severity
from pharmacy_api.prompts import INTERACTION_SECTION_LIMIT
from pharmacy_api.sanitizer import INTERACTION_RESULT_SCHEMA, sanitize
from pharmacy_api.utils.i18n import localized

logger = logging.getLogger(__name__)


def distinct_names(drugs: List[str]) -> List[str]:
    """Case-insensitive de-duplication that keeps the first spelling."""
    names: List[str] = []
    seen = set()
    for drug in drugs:
        key = " ".join(drug.lower().split())
        if key and key not in seen:
            seen.add(key)
            names.append(drug.strip())
    return names


def static_result(message_key: str, severity: Severity = Severity.UNKNOWN) -> Dict[str, Any]:
    return sanitize(
        {"interactions": [], "overallRisk": severity.value, "summary": localized(message_key)},
        INTERACTION_RESULT_SCHEMA,
    )


def finalize(result: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize and roll up the overall risk when it is absent or unknown."""
    sanitized = sanitize(result, INTERACTION_RESULT_SCHEMA)
    if sanitized["overallRisk"] == Severity.UNKNOWN.value and sanitized["interactions"]:
        sanitized["overallRisk"] = highest_severity(item["severity"] for item in sanitized["interactions"])
    return sanitized


def _count_summary(count: int) -> Dict[str, str]:
    if count:
        return localized("interactions.found", count=count)
    return localized("interactions.no_known")


@dataclass
class InteractionService:
    label_client: LabelClient
    gateway: AIGateway

    async def _fetch_labels(self, names: List[str]) -> Dict[str, Dict[str, Any]]:
        results = await asyncio.gather(
            *(self.label_client.fetch_label(name, exact=True, limit=1) for name in names)
        )
        return {name: records[0] for name, records in zip(names, results) if records}

    async def _analyze(self, labels: Dict[str, Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        blobs = [
            {
                "drug": name,
                "drug_interactions": section_text(record, "drug_interactions")[:INTERACTION_SECTION_LIMIT],
                "warnings": section_text(record, "boxed_warning", "warnings")[:INTERACTION_SECTION_LIMIT],
            }
            for name, record in labels.items()
        ]
        return await self.gateway.analyze_interactions(blobs)

    async def check(self, drugs: List[str]) -> Dict[str, Any]:
        """
        Check a list of drug names for interactions.

        Returns:
            InteractionResult dict, always fully populated
        """
        names = distinct_names(drugs)
        if len(names) < 2:
            return static_result("interactions.need_two")

        labels = await self._fetch_labels(names)
        if len(labels) < 2:
            logger.info("Only %d of %d drugs have label data", len(labels), len(names))
            return static_result("interactions.insufficient_data")

        result = None
        if self.gateway.should_skip_ai():
            logger.warning("AI providers are failing; using interaction rule table")
        else:
            result = await self._analyze(labels)

        if result is None:
            known_names = {name: names_in(labels.get(name, {})) for name in names}
            result = interaction_rules.evaluate(known_names)
            result["summary"] = _count_summary(len(result["interactions"]))
        elif not result.get("summary"):
            interactions = result.get("interactions") or []
            result["summary"] = _count_summary(len(interactions))

        return finalize(result)

    @staticmethod
    def error_result() -> Dict[str, Any]:
        return static_result("interactions.error", Severity.ERROR)
