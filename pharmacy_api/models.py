from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pharmacy_api.utils.i18n import DEFAULT_LANGUAGE, normalize_language


# Label sections summarized by the AI gateway, in display order
SUMMARY_TASKS = (
    "uses",
    "sideEffects",
    "warnings",
    "dosage",
    "contraindications",
    "interactions",
    "pregnancy",
)


class Severity(str, Enum):
    """Closed severity vocabulary for drug interactions."""

    CRITICAL = "critical"
    MODERATE = "moderate"
    MINOR = "minor"
    UNKNOWN = "unknown"
    ERROR = "error"


SEVERITY_ALIASES = {
    "critical": Severity.CRITICAL,
    "major": Severity.CRITICAL,
    "severe": Severity.CRITICAL,
    "high": Severity.CRITICAL,
    "contraindicated": Severity.CRITICAL,
    "moderate": Severity.MODERATE,
    "medium": Severity.MODERATE,
    "minor": Severity.MINOR,
    "safe": Severity.MINOR,
    "none": Severity.MINOR,
    "low": Severity.MINOR,
    "minimal": Severity.MINOR,
    "unknown": Severity.UNKNOWN,
    "error": Severity.ERROR,
}

SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.MODERATE: 2,
    Severity.MINOR: 1,
    Severity.UNKNOWN: 0,
    Severity.ERROR: 0,
}


def normalize_severity(value: Any, default: Severity = Severity.UNKNOWN) -> str:
    """Map any provider or rule-table severity label onto the closed enum."""
    if isinstance(value, Severity):
        return value.value
    if not isinstance(value, str):
        return default.value
    severity = SEVERITY_ALIASES.get(value.strip().lower())
    return (severity or default).value


def highest_severity(values: Iterable[Any]) -> str:
    """Return the most severe normalized value, or 'unknown' for no input."""
    best = Severity.UNKNOWN
    for value in values:
        severity = Severity(normalize_severity(value))
        if SEVERITY_RANK[severity] > SEVERITY_RANK[best]:
            best = severity
    return best.value


class _LanguageRequest(BaseModel):
    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def check_language(cls, value: Any) -> str:
        """Unknown or missing languages fall back to English."""
        if not isinstance(value, str):
            return DEFAULT_LANGUAGE
        return normalize_language(value)


class LookupRequest(_LanguageRequest):
    drugName: Optional[str] = None
    qrCode: Optional[str] = None  # Scanned code text, used as an alias for drugName

    @property
    def search_term(self) -> str:
        return (self.qrCode or self.drugName or "").strip()


class SearchRequest(_LanguageRequest):
    query: str = ""


class InteractionRequest(_LanguageRequest):
    drugs: List[str] = Field(default_factory=list)

    @field_validator("drugs", mode="before")
    @classmethod
    def check_drugs(cls, value: Any) -> List[str]:
        """Drop blank and non-string entries."""
        if not isinstance(value, list):
            return []
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class ChatRequest(BaseModel):
    message: str = ""
    drugName: str = ""
    context: Any = None


class SimilarRequest(BaseModel):
    drugName: str = ""
    category: Optional[str] = None
    limit: int = Field(default=8, ge=1, le=25)

    @model_validator(mode="before")
    @classmethod
    def check_limit(cls, values: Any) -> Any:
        """Treat a null limit as the default."""
        if isinstance(values, dict) and values.get("limit") is None:
            values = {k: v for k, v in values.items() if k != "limit"}
        return values


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    version: str


class LookupResponse(BaseModel):
    found: bool
    drug: Optional[Dict[str, Any]] = None
    cached: bool = False


class SearchResponse(BaseModel):
    drugs: List[Dict[str, Any]]
    translationInfo: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[Dict[str, Any]]] = None
    message: Optional[str] = None


class InteractionResponse(BaseModel):
    interactions: List[Dict[str, Any]]
    overallRisk: Severity
    summary: Dict[str, str]
    disclaimer: Optional[Dict[str, str]] = None


class ChatResponse(BaseModel):
    reply: str
    ok: bool = True


class SimilarResponse(BaseModel):
    similar: List[Dict[str, Any]]
    alternatives: List[Dict[str, Any]]


class StatusResponse(BaseModel):
    status: str
    ai_available: bool
    provider_failures: Dict[str, int]
    drug_cache: Dict[str, Any]
    translation_cache: Dict[str, Any]


class CacheClearResponse(BaseModel):
    status: str
    drug_cache_entries_cleared: int
    translation_cache_entries_cleared: int
