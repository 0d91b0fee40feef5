import logging
from dataclasses import dataclass
from typing import Any, Dict

from pharmacy_api.ai_gateway import AIGateway, detect_language
from pharmacy_api.utils.i18n import translate

logger = logging.getLogger(__name__)


@dataclass
class DrugChatService:
    gateway: AIGateway

    async def ask(self, message: str, drug_name: str, context: Any) -> Dict[str, Any]:
        """Stateless single-turn question about one drug."""
        if not (message or "").strip() or not (drug_name or "").strip():
            return {"reply": translate("chat.invalid", detect_language(message or "")), "ok": False}

        reply, ok = await self.gateway.chat(message.strip(), drug_name.strip(), context)
        if not ok:
            logger.warning("Chat about %r answered with fallback reply", drug_name)
        return {"reply": reply, "ok": ok}
