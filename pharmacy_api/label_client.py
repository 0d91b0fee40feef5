"""Low-level openFDA drug-label client with never-raise semantics and record helpers."""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_LABEL_URL = "https://api.fda.gov/drug/label.json"

# Ranked sources for a record's display category
CATEGORY_FIELDS = ("pharm_class_epc", "pharm_class_pe", "pharm_class_moa", "product_type")
DEFAULT_CATEGORY = "General Medication"


class LabelClientError(Exception):
    """Raised internally when the label API cannot produce usable results."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str = "label_client_error",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - simple representation
        parts = [f"{self.error_type}: {self.message}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return "; ".join(parts)


def _quote(term: str) -> str:
    return '"' + term.replace('"', "").strip() + '"'


def exact_expression(term: str) -> str:
    """Brand-or-generic match on the whole (quoted) name."""
    quoted = _quote(term)
    return f"(openfda.brand_name:{quoted} OR openfda.generic_name:{quoted})"


def wildcard_expression(term: str) -> str:
    """Brand-or-generic prefix match. openFDA wildcards only apply to single tokens."""
    tokens = term.replace('"', "").lower().split()
    if len(tokens) != 1:
        return exact_expression(term)
    return f"(openfda.brand_name:{tokens[0]}* OR openfda.generic_name:{tokens[0]}*)"


class LabelClient:
    """openFDA label search client.

    Every public fetch returns a list of label records. Any failure (404,
    other non-2xx status, timeout, transport error, malformed JSON) is logged
    and degraded to an empty list, so "nothing found" and "source down" look
    the same to callers.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_LABEL_URL,
        *,
        timeout: float = 15.0,
        verify_tls: bool = False,
        session: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.session = session or self._initialize_session()

    def _initialize_session(self) -> httpx.AsyncClient:
        """IPv4-only transport with a bounded timeout."""

        logger.info(f"Label client initialized for {self.base_url}")
        transport = httpx.AsyncHTTPTransport(local_address="0.0.0.0", verify=self.verify_tls)
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={"User-Agent": "Mozilla/5.0", "Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self.session and not self.session.is_closed:
            await self.session.aclose()

    async def _request(self, search: str, limit: int) -> List[Dict[str, Any]]:
        params = {"search": search, "limit": str(limit)}
        try:
            response = await self.session.get(self.base_url, params=params)
        except (httpx.TimeoutException, httpx.RequestError) as exc:
            raise LabelClientError(f"request failed: {exc}", error_type="request_failed") from exc

        if response.status_code == 404:
            return []
        if response.status_code >= 400:
            raise LabelClientError(
                "label API returned an error status",
                error_type="bad_status",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise LabelClientError("malformed JSON body", error_type="bad_json") from exc

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            return []
        return [record for record in results if isinstance(record, dict)]

    async def _search(self, search: str, limit: int) -> List[Dict[str, Any]]:
        try:
            results = await self._request(search, limit)
        except LabelClientError as exc:
            logger.warning("Label search %r failed: %s", search, exc)
            return []
        logger.debug("Label search %r returned %d records", search, len(results))
        return results

    async def fetch_label(self, query: str, *, exact: bool = True, limit: int = 1) -> List[Dict[str, Any]]:
        """
        Fetch label records for a drug name.

        Args:
            query: Brand or generic name
            exact: Quote the name (True) or use a wildcard prefix (False)
            limit: Maximum records to return

        Returns:
            Label records, empty when nothing was found or the source failed
        """
        term = (query or "").strip()
        if not term:
            return []
        expression = exact_expression(term) if exact else wildcard_expression(term)
        return await self._search(expression, limit)

    async def search_labels(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Prefix search used by the drug search page."""
        return await self.fetch_label(query, exact=False, limit=limit)

    async def search_by_class(self, category: str, limit: int = 8) -> List[Dict[str, Any]]:
        """Find labels sharing a pharmacologic class, trying the exact field first."""
        term = (category or "").strip()
        if not term:
            return []
        for expression in (
            f"openfda.pharm_class_epc.exact:{_quote(term)}",
            f"openfda.pharm_class_epc:{_quote(term)}",
        ):
            results = await self._search(expression, limit)
            if results:
                return results
        return []


# ==================== RECORD HELPERS ====================

def openfda_value(record: Dict[str, Any], key: str) -> str:
    """First value of an openfda list field, or ''."""
    values = (record.get("openfda") or {}).get(key)
    if isinstance(values, list):
        for value in values:
            if isinstance(value, str) and value.strip():
                return value.strip()
    elif isinstance(values, str):
        return values.strip()
    return ""


def section_text(record: Dict[str, Any], *keys: str) -> str:
    """Text of the first present label section among ``keys``."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, list):
            text = "\n".join(v.strip() for v in value if isinstance(v, str) and v.strip())
        elif isinstance(value, str):
            text = value.strip()
        else:
            text = ""
        if text:
            return text
    return ""


def best_category(record: Dict[str, Any]) -> str:
    for key in CATEGORY_FIELDS:
        value = openfda_value(record, key)
        if value:
            return value
    return DEFAULT_CATEGORY


def dosage_form(record: Dict[str, Any]) -> str:
    return openfda_value(record, "dosage_form") or openfda_value(record, "route")


def display_name(record: Dict[str, Any], fallback: str = "") -> str:
    return openfda_value(record, "brand_name") or openfda_value(record, "generic_name") or fallback


def record_id(record: Dict[str, Any]) -> str:
    return str(record.get("id") or record.get("set_id") or "")


def to_card(record: Dict[str, Any]) -> Dict[str, Any]:
    """Lightweight search-result shape for one label record."""
    generic = openfda_value(record, "generic_name")
    return {
        "id": record_id(record),
        "name": display_name(record),
        "genericName": generic,
        "scientificName": generic,
        "category": best_category(record),
        "dosageForm": dosage_form(record),
        "manufacturer": openfda_value(record, "manufacturer_name"),
    }


def names_in(record: Dict[str, Any]) -> List[str]:
    """Lowercased brand and generic names listed on a record."""
    openfda = record.get("openfda") or {}
    names: List[str] = []
    for key in ("brand_name", "generic_name", "substance_name"):
        values = openfda.get(key) or []
        if isinstance(values, str):
            values = [values]
        names.extend(v.lower() for v in values if isinstance(v, str))
    return names
