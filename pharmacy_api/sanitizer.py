"""
Response sanitizer.

Normalizes AI output and assembled API payloads against a declared shape so
callers never see a null or missing multilingual field. ``sanitize`` is
pure (the input is never mutated), total (any input, including None, is
accepted) and idempotent.

A schema is a plain dict of field name -> field descriptor::

    CARD_SCHEMA = {
        "name": Text(default="Unknown"),
        "scientificName": Text(default="N/A", aliases=("genericName",)),
    }

Keys that are not declared in the schema pass through unchanged.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pharmacy_api.models import SUMMARY_TASKS, Severity, normalize_severity
from pharmacy_api.utils.i18n import SUPPORTED_LANGUAGES, localized, localized_list, translate

LANGUAGES = tuple(SUPPORTED_LANGUAGES)

NOT_AVAILABLE = localized("placeholder.not_available")

Schema = Dict[str, "FieldSpec"]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(part for part in (_as_text(v) for v in value) if part).strip()
    if isinstance(value, dict):
        return ""
    return str(value)


def _as_items(value: Any) -> List[str]:
    if value is None or isinstance(value, dict):
        return []
    if isinstance(value, (list, tuple)):
        items = (_as_text(item) for item in value if not isinstance(item, dict))
        return [item for item in items if item.strip()]
    text = _as_text(value)
    return [text] if text.strip() else []


class FieldSpec:
    """Base descriptor: how to find a field and coerce it to its shape."""

    omit_missing = False

    def __init__(self, aliases: Iterable[str] = ()) -> None:
        self.aliases = tuple(aliases)

    def lookup(self, source: Dict[str, Any], name: str) -> Tuple[bool, Any]:
        for key in (name,) + self.aliases:
            value = source.get(key)
            if value is None or value == "" or value == {}:
                continue
            return True, value
        return False, None

    def empty(self) -> Any:
        raise NotImplementedError

    def coerce(self, value: Any) -> Any:
        raise NotImplementedError


class Text(FieldSpec):
    """Plain string. openFDA-style single-item lists collapse to their first item."""

    def __init__(self, default: str = "", aliases: Iterable[str] = ()) -> None:
        super().__init__(aliases)
        self.default = default

    def empty(self) -> str:
        return self.default

    def coerce(self, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            items = _as_items(value)
            return items[0] if items else self.default
        text = _as_text(value)
        return text if text else self.default


class SeverityField(FieldSpec):
    def __init__(self, default: Severity = Severity.UNKNOWN) -> None:
        super().__init__()
        self.default = default

    def empty(self) -> str:
        return self.default.value

    def coerce(self, value: Any) -> str:
        return normalize_severity(value, self.default)


class LocalizedString(FieldSpec):
    """{en, ar, ku} -> string. Scalars are broadcast to every language."""

    def __init__(self, default: Optional[Dict[str, str]] = None, aliases: Iterable[str] = ()) -> None:
        super().__init__(aliases)
        self.default = default

    def empty(self) -> Dict[str, str]:
        if self.default:
            return dict(self.default)
        return {lang: "" for lang in LANGUAGES}

    def _missing(self, lang: str) -> str:
        if self.default and self.default.get(lang):
            return self.default[lang]
        return NOT_AVAILABLE[lang]

    def coerce(self, value: Any) -> Dict[str, str]:
        if isinstance(value, dict):
            result = {}
            for lang in LANGUAGES:
                if value.get(lang) is None:
                    result[lang] = self._missing(lang)
                else:
                    result[lang] = _as_text(value[lang])
            return result
        text = _as_text(value)
        return {lang: text for lang in LANGUAGES}


class LocalizedList(FieldSpec):
    """{en, ar, ku} -> list of strings. Scalars and bare lists are broadcast."""

    def __init__(self, default: Optional[Dict[str, List[str]]] = None, aliases: Iterable[str] = ()) -> None:
        super().__init__(aliases)
        self.default = default

    def empty(self) -> Dict[str, List[str]]:
        if self.default:
            return {lang: list(self.default.get(lang) or []) for lang in LANGUAGES}
        return {lang: [] for lang in LANGUAGES}

    def _missing(self, lang: str) -> List[str]:
        if self.default and self.default.get(lang):
            return list(self.default[lang])
        return [NOT_AVAILABLE[lang]]

    def coerce(self, value: Any) -> Dict[str, List[str]]:
        if isinstance(value, dict):
            result = {}
            for lang in LANGUAGES:
                if value.get(lang) is None:
                    result[lang] = self._missing(lang)
                else:
                    result[lang] = _as_items(value[lang])
            return result
        items = _as_items(value)
        return {lang: list(items) for lang in LANGUAGES}


class Nested(FieldSpec):
    def __init__(self, schema: Schema, aliases: Iterable[str] = ()) -> None:
        super().__init__(aliases)
        self.schema = schema

    def empty(self) -> Dict[str, Any]:
        return sanitize({}, self.schema)

    def coerce(self, value: Any) -> Dict[str, Any]:
        return sanitize(value, self.schema)


class ListOf(FieldSpec):
    """List of nested objects (schema dict) or of values (field descriptor)."""

    def __init__(self, item: Any, aliases: Iterable[str] = ()) -> None:
        super().__init__(aliases)
        self.item = item

    def empty(self) -> list:
        return []

    def coerce(self, value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            return []
        if isinstance(self.item, FieldSpec):
            return [self.item.coerce(v) for v in value if v is not None]
        return [sanitize(v, self.item) for v in value if isinstance(v, dict)]


class OptionalField(FieldSpec):
    """Wraps another descriptor; the key is left out when absent."""

    omit_missing = True

    def __init__(self, inner: FieldSpec) -> None:
        super().__init__(inner.aliases)
        self.inner = inner

    def lookup(self, source: Dict[str, Any], name: str) -> Tuple[bool, Any]:
        return self.inner.lookup(source, name)

    def empty(self) -> Any:
        return self.inner.empty()

    def coerce(self, value: Any) -> Any:
        return self.inner.coerce(value)


def sanitize(raw: Any, schema: Schema) -> Dict[str, Any]:
    """
    Normalize ``raw`` against ``schema``.

    Args:
        raw: Any value; non-dicts are treated as an empty object
        schema: Field name -> descriptor mapping

    Returns:
        A new dict with every declared field present and well-typed
    """
    source = raw if isinstance(raw, dict) else {}
    result = {key: copy.deepcopy(value) for key, value in source.items() if key not in schema}

    for name, spec in schema.items():
        present, value = spec.lookup(source, name)
        if present:
            result[name] = spec.coerce(value)
        elif not spec.omit_missing:
            result[name] = spec.empty()

    return result


# ==================== SCHEMAS ====================

def summary_default(task: str) -> Dict[str, List[str]]:
    """Static per-task default used when a section is missing or AI fails."""
    return localized_list(f"summary.default.{task}")


AI_SUMMARY_SCHEMA: Schema = {
    task: LocalizedList(default=summary_default(task)) for task in SUMMARY_TASKS
}

RAW_TEXT_FIELDS = (
    "indications",
    "dosage",
    "warnings",
    "boxedWarning",
    "adverseReactions",
    "contraindications",
    "interactions",
    "pregnancy",
    "pediatric",
    "geriatric",
    "route",
    "supply",
)

_NONE_LISTED = translate("raw.none_listed")

INGREDIENTS_SCHEMA: Schema = {
    "active": Text(default=_NONE_LISTED),
    "inactive": Text(default=_NONE_LISTED),
}

RAW_DETAILS_SCHEMA: Schema = {name: Text(default=_NONE_LISTED) for name in RAW_TEXT_FIELDS}
RAW_DETAILS_SCHEMA["ingredients"] = Nested(INGREDIENTS_SCHEMA)

_UNKNOWN_NAME = translate("placeholder.unknown_name")
_NA = NOT_AVAILABLE["en"]

DRUG_SUMMARY_SCHEMA: Schema = {
    "id": Text(default=""),
    "name": Text(default=_UNKNOWN_NAME, aliases=("brandName",)),
    "genericName": Text(default=_NA, aliases=("scientificName",)),
    "scientificName": Text(default=_NA, aliases=("genericName",)),
    "category": Text(default="General Medication"),
    "manufacturer": Text(default=_NA),
    "aiSummary": Nested(AI_SUMMARY_SCHEMA),
    "rawDetails": Nested(RAW_DETAILS_SCHEMA),
}

CARD_SCHEMA: Schema = {
    "id": Text(default=""),
    "name": Text(default=_UNKNOWN_NAME, aliases=("brandName",)),
    "genericName": Text(default=_NA, aliases=("scientificName",)),
    "scientificName": Text(default=_NA, aliases=("genericName",)),
    "category": Text(default="General Medication"),
    "dosageForm": Text(default=_NA, aliases=("dosage", "route")),
    "manufacturer": Text(default=_NA),
}

INTERACTION_SCHEMA: Schema = {
    "severity": SeverityField(),
    "drugs": ListOf(Text()),
    "title": LocalizedString(default=localized("interactions.no_interaction_title")),
    "description": LocalizedString(),
    "recommendations": LocalizedList(),
}

INTERACTION_RESULT_SCHEMA: Schema = {
    "interactions": ListOf(INTERACTION_SCHEMA),
    "overallRisk": SeverityField(),
    "summary": LocalizedString(default=localized("info.unavailable")),
    "disclaimer": LocalizedString(default=localized("interactions.disclaimer")),
}

SUGGESTION_SCHEMA: Schema = {
    "original": Text(),
    "suggestion": Text(),
    "description": Text(),
}

TRANSLATION_INFO_SCHEMA: Schema = {
    "original": Text(),
    "translated": Text(),
    "message": Text(),
}

SEARCH_RESPONSE_SCHEMA: Schema = {
    "drugs": ListOf(CARD_SCHEMA),
    "translationInfo": OptionalField(Nested(TRANSLATION_INFO_SCHEMA)),
    "suggestions": OptionalField(ListOf(SUGGESTION_SCHEMA)),
    "message": OptionalField(Text()),
}

SIMILAR_RESPONSE_SCHEMA: Schema = {
    "similar": ListOf(CARD_SCHEMA),
    "alternatives": ListOf(CARD_SCHEMA),
}
