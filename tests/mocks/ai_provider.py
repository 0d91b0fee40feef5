"""
Mock AI Provider
Stand-ins for ChatCompletionProvider that never touch the network.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Union

from pharmacy_api.ai_gateway import ProviderError

MOCK_SUMMARY = {
    "en": ["Point one", "Point two", "Point three", "Point four"],
    "ar": ["نقطة أولى", "نقطة ثانية", "نقطة ثالثة"],
    "ku": ["خاڵی یەکەم", "خاڵی دووەم", "خاڵی سێیەم"],
}

MOCK_INTERACTIONS = {
    "interactions": [
        {
            "severity": "major",
            "drugs": ["aspirin", "warfarin"],
            "title": {"en": "Bleeding risk", "ar": "خطر النزيف", "ku": "مەترسی خوێنبەربوون"},
            "description": {"en": "Increased bleeding.", "ar": "زيادة النزيف.", "ku": "خوێنبەربوونی زیاتر."},
            "recommendations": {"en": ["Avoid."], "ar": ["تجنب."], "ku": ["دووربکەوە."]},
        }
    ],
    "summary": {"en": "One interaction.", "ar": "تفاعل واحد.", "ku": "یەک کارلێک."},
}

Reply = Union[str, Exception]


def pharmacy_responder(messages: List[Dict[str, str]]) -> str:
    """Answer each prompt type with a plausible, well-formed reply."""
    system = messages[0]["content"]
    user = messages[-1]["content"]
    if "patient-friendly drug summaries" in system:
        return json.dumps(MOCK_SUMMARY, ensure_ascii=False)
    if "medical translator" in system:
        return f"ترجمة: {user}"
    if "interaction expert" in system:
        return json.dumps(MOCK_INTERACTIONS, ensure_ascii=False)
    return "Take it with food to reduce stomach upset."


class MockProvider:
    """
    Records every call. Replies come from ``replies`` (consumed in order;
    an Exception instance is raised) or from ``responder``.
    """

    def __init__(
        self,
        name: str = "mock",
        *,
        replies: Optional[List[Reply]] = None,
        responder: Optional[Callable[[List[Dict[str, str]]], str]] = None,
        available: bool = True,
    ):
        self.name = name
        self.available = available
        self.replies = list(replies or [])
        self.responder = responder
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, messages, **options) -> str:
        self.calls.append({"messages": messages, **options})
        if self.replies:
            reply = self.replies.pop(0)
        elif self.responder is not None:
            reply = self.responder(messages)
        else:
            reply = ProviderError("no reply configured", provider=self.name)

        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self) -> None:
        return None


def failing_provider(name: str = "down") -> MockProvider:
    """Provider whose every call fails with a 503."""

    def fail(_messages):
        raise ProviderError("unavailable", provider=name, status_code=503)

    return MockProvider(name, responder=fail)
