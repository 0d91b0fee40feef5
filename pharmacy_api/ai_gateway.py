"""
AI Gateway Module
Talks to one or more OpenAI-compatible chat-completion providers.
Handles provider failover, failure accounting and the four call modes
(chat, summarize, translate, interaction analysis)
"""

import json
import logging
import re
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Sequence, Tuple

import httpx

from pharmacy_api import prompts
from pharmacy_api.cache import TTLCache, translation_cache_key
from pharmacy_api.config.settings import ProviderSettings
from pharmacy_api.sanitizer import AI_SUMMARY_SCHEMA, summary_default
from pharmacy_api.utils.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, translate as translate_message

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 5
MAX_SUMMARY_ITEMS = 3

# Letters used by Sorani but not by Arabic: ە ێ ۆ ڕ ڵ ڤ
SORANI_LETTERS = re.compile("[ەێۆڕڵڤ]")
ARABIC_BLOCK = re.compile("[؀-ۿ]")

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class ProviderError(Exception):
    """A single provider call failed (transport, status, or empty content)."""

    def __init__(self, message: str, *, provider: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - simple representation
        parts = [f"{self.provider}: {self.message}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return "; ".join(parts)


class AllProvidersFailed(Exception):
    """Every configured provider failed or was unavailable for a call."""


class ChatCompletionProvider:
    """
    Client for one OpenAI-compatible chat-completion endpoint.

    Posts to ``{base_url}/chat/completions`` and returns
    ``choices[0].message.content``.
    """

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        timeout: float = 20.0,
        session: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings
        self.timeout = timeout
        self.session = session or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def available(self) -> bool:
        return bool(self.settings.api_key)

    async def aclose(self) -> None:
        if self.session and not self.session.is_closed:
            await self.session.aclose()

    async def complete(
        self,
        messages: List[Dict[str, str]],
        *,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": self.settings.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        headers = {"Authorization": f"Bearer {self.settings.api_key}"}
        url = f"{self.settings.base_url}/chat/completions"

        try:
            response = await self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except (httpx.TimeoutException, httpx.RequestError) as exc:
            raise ProviderError(f"request failed: {exc}", provider=self.name) from exc

        if response.status_code >= 400:
            raise ProviderError(
                "provider returned an error status",
                provider=self.name,
                status_code=response.status_code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderError("malformed completion envelope", provider=self.name) from exc

        if not isinstance(content, str) or not content.strip():
            raise ProviderError("empty completion", provider=self.name)
        return content.strip()


class FailureCounter:
    """
    Per-provider count of recent failures.

    Failures older than ``window_seconds`` stop counting and a success resets
    the provider, so a transient outage does not disable AI permanently.
    """

    def __init__(
        self,
        threshold: int = 5,
        window_seconds: float = 300.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.threshold = threshold
        self.window_seconds = window_seconds
        self._clock = clock
        self._failures: Dict[str, Deque[float]] = {}
        self.total = 0

    def _prune(self, provider: str) -> Deque[float]:
        failures = self._failures.setdefault(provider, deque())
        cutoff = self._clock() - self.window_seconds
        while failures and failures[0] < cutoff:
            failures.popleft()
        return failures

    def record_failure(self, provider: str) -> int:
        failures = self._prune(provider)
        failures.append(self._clock())
        self.total += 1
        return len(failures)

    def record_success(self, provider: str) -> None:
        self._failures.pop(provider, None)

    def count(self, provider: str) -> int:
        return len(self._prune(provider))

    def snapshot(self) -> Dict[str, int]:
        return {provider: self.count(provider) for provider in list(self._failures)}

    def tripped(self) -> bool:
        return any(count >= self.threshold for count in self.snapshot().values())


def detect_language(text: str) -> str:
    """Guess the language of a chat message from its script."""
    if not text:
        return DEFAULT_LANGUAGE
    if SORANI_LETTERS.search(text):
        return "ku"
    if ARABIC_BLOCK.search(text):
        return "ar"
    return DEFAULT_LANGUAGE


def parse_json_object(content: str) -> Dict[str, Any]:
    """Parse a model reply that should be a JSON object, tolerating code fences."""
    data = json.loads(_CODE_FENCE.sub("", content.strip()))
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


class AIGateway:
    """
    Failover front door for every AI call made by the handlers.

    Providers are tried best-quality first. Each mode converts total failure
    into its own deterministic default, so callers never see an exception.
    """

    def __init__(
        self,
        providers: Sequence[ChatCompletionProvider],
        failure_counter: Optional[FailureCounter] = None,
        translation_cache: Optional[TTLCache] = None,
    ) -> None:
        self.providers = list(providers)
        self.failure_counter = failure_counter or FailureCounter()
        self.translation_cache = translation_cache if translation_cache is not None else TTLCache(120)
        self.call_count = 0

    def should_skip_ai(self) -> bool:
        """True when any provider has failed too often recently."""
        return self.failure_counter.tripped()

    def provider_failures(self) -> Dict[str, int]:
        counts = {provider.name: 0 for provider in self.providers}
        counts.update(self.failure_counter.snapshot())
        return counts

    async def try_in_order(
        self,
        messages: List[Dict[str, str]],
        parse: Callable[[str], Any],
        **options: Any,
    ) -> Any:
        """
        Call each available provider once, in order, until one succeeds.

        Args:
            messages: Chat messages sent unchanged to every provider
            parse: Converts the raw reply; raising counts as a provider failure
            **options: temperature / max_tokens / json_mode

        Returns:
            The parsed result of the first successful provider

        Raises:
            AllProvidersFailed: When no provider produced a parseable reply
        """
        for provider in self.providers:
            if not provider.available:
                logger.debug("Skipping AI provider %s: no API key", provider.name)
                continue

            self.call_count += 1
            try:
                content = await provider.complete(messages, **options)
                result = parse(content)
            except Exception as exc:
                failures = self.failure_counter.record_failure(provider.name)
                logger.warning("AI provider %s failed (%d recent failures): %s", provider.name, failures, exc)
                continue

            self.failure_counter.record_success(provider.name)
            return result

        logger.error("All AI providers failed")
        raise AllProvidersFailed("no AI provider produced a usable reply")

    async def chat(self, message: str, drug_name: str, context: Any) -> Tuple[str, bool]:
        """
        Answer a question about one drug.

        Returns:
            (reply, ok) where a failed call yields the localized apology and ok=False
        """
        language = detect_language(message)
        chat_messages = prompts.build_chat_messages(message, drug_name, context, language)
        try:
            reply = await self.try_in_order(chat_messages, str.strip, temperature=0.3, max_tokens=300)
        except AllProvidersFailed:
            return translate_message("chat.unavailable", language), False
        return reply, True

    async def summarize(self, text: Optional[str], task: str) -> Dict[str, List[str]]:
        """
        Summarize one label section into {en, ar, ku} lists of at most 3 items.

        Short or missing text returns the task default without calling any provider.
        """
        if not text or len(text.strip()) < MIN_TEXT_LENGTH:
            return summary_default(task)

        field = AI_SUMMARY_SCHEMA[task]
        default = summary_default(task)

        def parse(content: str) -> Dict[str, List[str]]:
            data = parse_json_object(content)
            if not any(lang in data for lang in SUPPORTED_LANGUAGES):
                raise ValueError("summary is missing every language key")
            summary = field.coerce(data)
            if not any(summary[lang] for lang in SUPPORTED_LANGUAGES if data.get(lang) is not None):
                raise ValueError("summary has no usable items")
            # Languages the model left blank fall back to the static default
            return {lang: items or list(default[lang]) for lang, items in summary.items()}

        try:
            summary = await self.try_in_order(
                prompts.build_summary_messages(text, task),
                parse,
                temperature=0.1,
                max_tokens=800,
                json_mode=True,
            )
        except AllProvidersFailed:
            return summary_default(task)

        return {lang: items[:MAX_SUMMARY_ITEMS] for lang, items in summary.items()}

    async def translate(self, text: Optional[str], target_language: str) -> Optional[str]:
        """
        Translate label text into ``target_language``.

        English targets, unsupported targets and very short texts are returned
        unchanged. On failure the original text is returned.
        """
        if (
            target_language == DEFAULT_LANGUAGE
            or target_language not in SUPPORTED_LANGUAGES
            or not text
            or len(text.strip()) < MIN_TEXT_LENGTH
        ):
            return text

        key = translation_cache_key(target_language, text)
        cached = self.translation_cache.get(key)
        if cached is not None:
            logger.debug("Translation cache hit for %s", target_language)
            return cached

        try:
            translated = await self.try_in_order(
                prompts.build_translation_messages(text, target_language),
                str.strip,
                temperature=0.1,
                max_tokens=2000,
            )
        except AllProvidersFailed:
            return text

        self.translation_cache.set(key, translated)
        return translated

    async def analyze_interactions(self, label_blobs: List[Dict[str, str]]) -> Optional[Dict[str, Any]]:
        """
        Ask the model for interactions between the supplied drugs.

        Returns:
            The raw result dict (severities not yet normalized), or None on failure
        """

        def parse(content: str) -> Dict[str, Any]:
            data = parse_json_object(content)
            if not isinstance(data.get("interactions"), list):
                raise ValueError("interaction result has no interactions list")
            return data

        try:
            return await self.try_in_order(
                prompts.build_interaction_messages(label_blobs),
                parse,
                temperature=0.1,
                max_tokens=3000,
                json_mode=True,
            )
        except AllProvidersFailed:
            return None

    async def aclose(self) -> None:
        for provider in self.providers:
            await provider.aclose()
