import pytest

from pharmacy_api.ai_gateway import AIGateway, FailureCounter
from pharmacy_api.cache import TTLCache
from pharmacy_api.services.interactions import InteractionService, distinct_names
from pharmacy_api.utils.i18n import localized, translate

from mocks import MOCK_INTERACTIONS, MockProvider, failing_provider


def make_service(label_client, *providers, threshold=5):
    gateway = AIGateway(list(providers), FailureCounter(threshold=threshold), TTLCache(120))
    return InteractionService(label_client=label_client, gateway=gateway)


def test_distinct_names_ignores_case_and_spacing():
    assert distinct_names(["Aspirin", " aspirin ", "Warfarin", ""]) == ["Aspirin", "Warfarin"]


@pytest.mark.anyio
@pytest.mark.parametrize("drugs", [[], ["aspirin"], ["Aspirin", "aspirin"]])
async def test_fewer_than_two_drugs_needs_no_lookups(drugs, label_client, provider):
    service = make_service(label_client, provider)

    result = await service.check(drugs)

    assert result["interactions"] == []
    assert result["overallRisk"] == "unknown"
    assert result["summary"] == localized("interactions.need_two")
    assert label_client.calls == []
    assert provider.calls == []


@pytest.mark.anyio
async def test_missing_labels_give_insufficient_data(label_client, provider):
    service = make_service(label_client, provider)

    result = await service.check(["aspirin", "xyzabc123"])

    assert result["overallRisk"] == "unknown"
    assert result["summary"]["en"] == translate("interactions.insufficient_data", "en")
    assert provider.calls == []


@pytest.mark.anyio
async def test_ai_result_is_normalized(label_client, provider):
    service = make_service(label_client, provider)

    result = await service.check(["aspirin", "warfarin"])

    assert len(provider.calls) == 1
    assert result["interactions"][0]["severity"] == "critical"
    assert result["overallRisk"] == "critical"
    assert result["summary"] == MOCK_INTERACTIONS["summary"]


@pytest.mark.anyio
async def test_ai_prompt_carries_both_labels(label_client, provider):
    service = make_service(label_client, provider)

    await service.check(["aspirin", "warfarin"])

    prompt = provider.calls[0]["messages"][-1]["content"]
    assert "anticoagulation" in prompt
    assert "BLEEDING RISK" in prompt


@pytest.mark.anyio
async def test_ai_failure_falls_back_to_rule_table(label_client):
    service = make_service(label_client, failing_provider("a"), failing_provider("b"))

    result = await service.check(["aspirin", "warfarin"])

    assert result["overallRisk"] == "critical"
    item = result["interactions"][0]
    assert item["drugs"] == ["aspirin", "warfarin"]
    assert set(item["title"]) == {"en", "ar", "ku"}
    assert result["summary"] == localized("interactions.found", count=1)


@pytest.mark.anyio
async def test_brand_names_match_rules_through_label_names(label_client):
    service = make_service(label_client, failing_provider())

    result = await service.check(["advil", "lisinopril"])

    assert result["overallRisk"] == "moderate"


@pytest.mark.anyio
async def test_no_rule_match_reports_unknown(label_client):
    service = make_service(label_client, failing_provider())

    result = await service.check(["metformin", "lisinopril"])

    assert result["interactions"] == []
    assert result["overallRisk"] == "unknown"
    assert result["summary"] == localized("interactions.no_known")


@pytest.mark.anyio
async def test_tripped_counter_skips_ai(label_client):
    provider = MockProvider("primary", replies=[])
    service = make_service(label_client, provider, threshold=1)
    service.gateway.failure_counter.record_failure("primary")

    result = await service.check(["aspirin", "ibuprofen"])

    assert provider.calls == []
    assert result["overallRisk"] == "moderate"


@pytest.mark.anyio
async def test_ai_result_without_summary_gets_count_summary(label_client):
    provider = MockProvider("primary", replies=['{"interactions": [{"severity": "minor", "drugs": ["a", "b"]}]}'])
    service = make_service(label_client, provider)

    result = await service.check(["aspirin", "warfarin"])

    assert result["overallRisk"] == "minor"
    assert result["summary"] == localized("interactions.found", count=1)


def test_error_result():
    result = InteractionService.error_result()

    assert result["overallRisk"] == "error"
    assert result["interactions"] == []
    assert result["summary"]["en"] == translate("interactions.error", "en")
