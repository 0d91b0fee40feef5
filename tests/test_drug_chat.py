import pytest

from pharmacy_api.ai_gateway import AIGateway
from pharmacy_api.services.drug_chat import DrugChatService
from pharmacy_api.utils.i18n import translate

from mocks import failing_provider


@pytest.mark.anyio
async def test_answers_question(gateway, provider):
    service = DrugChatService(gateway=gateway)

    result = await service.ask("Can I take it with food?", "Advil", {"warnings": "Stomach bleeding."})

    assert result == {"reply": "Take it with food to reduce stomach upset.", "ok": True}
    assert "Stomach bleeding." in provider.calls[0]["messages"][0]["content"]


@pytest.mark.anyio
@pytest.mark.parametrize("message,drug_name", [("", "Advil"), ("   ", "Advil"), ("Is it safe?", "")])
async def test_blank_input_is_rejected_without_ai_call(message, drug_name, gateway, provider):
    service = DrugChatService(gateway=gateway)

    result = await service.ask(message, drug_name, {})

    assert result == {"reply": translate("chat.invalid", "en"), "ok": False}
    assert provider.calls == []


@pytest.mark.anyio
async def test_provider_failure_returns_apology():
    service = DrugChatService(gateway=AIGateway([failing_provider()]))

    result = await service.ask("هل يمكنني تناوله مع الطعام؟", "Advil", None)

    assert result == {"reply": translate("chat.unavailable", "ar"), "ok": False}
