"""Drug detail lookup: one label record turned into a multilingual summary."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pharmacy_api.ai_gateway import AIGateway
from pharmacy_api.cache import TTLCache, drug_cache_key
from pharmacy_api.label_client import (
    LabelClient,
    best_category,
    display_name,
    openfda_value,
    record_id,
    section_text,
)
from pharmacy_api.models import SUMMARY_TASKS
from pharmacy_api.name_resolution import normalize_name, resolve
from pharmacy_api.sanitizer import DRUG_SUMMARY_SCHEMA, sanitize, summary_default
from pharmacy_api.utils.i18n import localized_list, translate

logger = logging.getLogger(__name__)

# rawDetails field -> openFDA section keys, first present wins
RAW_SECTIONS: Dict[str, Tuple[str, ...]] = {
    "indications": ("indications_and_usage", "purpose"),
    "dosage": ("dosage_and_administration",),
    "warnings": ("warnings", "warnings_and_cautions", "precautions"),
    "boxedWarning": ("boxed_warning",),
    "adverseReactions": ("adverse_reactions",),
    "contraindications": ("contraindications", "do_not_use"),
    "interactions": ("drug_interactions",),
    "pregnancy": ("pregnancy", "pregnancy_or_breast_feeding"),
    "pediatric": ("pediatric_use",),
    "geriatric": ("geriatric_use",),
    "supply": ("how_supplied", "storage_and_handling"),
}

INGREDIENT_SECTIONS = {
    "active": ("active_ingredient",),
    "inactive": ("inactive_ingredient",),
}

# Fields whose missing value reads "See label." rather than "None listed."
SEE_LABEL_FIELDS = {"route", "supply", "active", "inactive"}

# aiSummary task -> rawDetails fields fed to the model
SUMMARY_SOURCES: Dict[str, Tuple[str, ...]] = {
    "uses": ("indications",),
    "sideEffects": ("adverseReactions",),
    "warnings": ("boxedWarning", "warnings"),
    "dosage": ("dosage",),
    "contraindications": ("contraindications",),
    "interactions": ("interactions",),
    "pregnancy": ("pregnancy",),
}


def extract_sections(record: Dict[str, Any]) -> Dict[str, str]:
    """English label text per rawDetails field; '' where the label is silent."""
    sections = {name: section_text(record, *keys) for name, keys in RAW_SECTIONS.items()}
    sections["route"] = section_text(record, "route") or openfda_value(record, "route")
    for name, keys in INGREDIENT_SECTIONS.items():
        sections[name] = section_text(record, *keys)
    return sections


def summary_source(sections: Dict[str, str], task: str) -> str:
    return "\n\n".join(sections[name] for name in SUMMARY_SOURCES[task] if sections.get(name))


def _placeholder(field: str, language: str) -> str:
    key = "raw.see_label" if field in SEE_LABEL_FIELDS else "raw.none_listed"
    return translate(key, language)


@dataclass
class DrugLookupService:
    label_client: LabelClient
    gateway: AIGateway
    drug_cache: TTLCache

    async def _fetch_record(self, term: str) -> Optional[Dict[str, Any]]:
        records = await self.label_client.fetch_label(term, exact=True, limit=1)
        if not records:
            resolved = resolve(term)
            if resolved and normalize_name(resolved) != normalize_name(term):
                logger.info("No label for %r, retrying as %r", term, resolved)
                records = await self.label_client.fetch_label(resolved, exact=True, limit=1)
        return records[0] if records else None

    async def _raw_details(self, sections: Dict[str, str], language: str, use_ai: bool) -> Dict[str, Any]:
        fields = list(sections)

        async def localize(field: str) -> str:
            text = sections[field]
            if not text:
                return _placeholder(field, language)
            if not use_ai:
                return text
            return await self.gateway.translate(text, language)

        results = await asyncio.gather(*(localize(field) for field in fields), return_exceptions=True)

        details: Dict[str, Any] = {}
        for field, result in zip(fields, results):
            if isinstance(result, BaseException):
                logger.warning("Translating %s failed: %s", field, result)
                result = sections[field] or _placeholder(field, language)
            details[field] = result

        details["ingredients"] = {
            "active": details.pop("active"),
            "inactive": details.pop("inactive"),
        }
        return details

    async def _ai_summary(self, sections: Dict[str, str]) -> Dict[str, Dict[str, List[str]]]:
        results = await asyncio.gather(
            *(self.gateway.summarize(summary_source(sections, task), task) for task in SUMMARY_TASKS),
            return_exceptions=True,
        )
        summary = {}
        for task, result in zip(SUMMARY_TASKS, results):
            if isinstance(result, BaseException):
                logger.warning("Summarizing %s failed: %s", task, result)
                result = summary_default(task)
            summary[task] = result
        return summary

    async def lookup(self, search_term: str, language: str) -> Dict[str, Any]:
        """
        Build the drug detail payload for a name or scanned code.

        Returns:
            {found, drug?, cached}
        """
        term = (search_term or "").strip()
        if not term:
            return {"found": False, "cached": False}

        key = drug_cache_key(term, language)
        cached = self.drug_cache.get(key)
        if cached is not None:
            logger.debug("Drug cache hit for %s", key)
            return {"found": True, "drug": cached, "cached": True}

        record = await self._fetch_record(term)
        if record is None:
            logger.info("No label found for %r", term)
            return {"found": False, "cached": False}

        sections = extract_sections(record)
        use_ai = not self.gateway.should_skip_ai()
        failures_before = self.gateway.failure_counter.total

        if use_ai:
            ai_summary, raw_details = await asyncio.gather(
                self._ai_summary(sections),
                self._raw_details(sections, language, use_ai=True),
            )
        else:
            logger.warning("AI providers are failing; serving raw label data for %r", term)
            unavailable = localized_list("summary.unavailable")
            ai_summary = {task: unavailable for task in SUMMARY_TASKS}
            raw_details = await self._raw_details(sections, language, use_ai=False)

        generic = openfda_value(record, "generic_name")
        drug = sanitize(
            {
                "id": record_id(record),
                "name": display_name(record, fallback=term),
                "genericName": generic,
                "scientificName": generic,
                "category": best_category(record),
                "manufacturer": openfda_value(record, "manufacturer_name"),
                "aiSummary": ai_summary,
                "rawDetails": raw_details,
            },
            DRUG_SUMMARY_SCHEMA,
        )

        # Degraded payloads are not cached so recovered providers are used next time
        if use_ai and self.gateway.failure_counter.total == failures_before:
            self.drug_cache.set(key, drug)
        else:
            logger.info("Not caching degraded summary for %r", term)
        return {"found": True, "drug": drug, "cached": False}
