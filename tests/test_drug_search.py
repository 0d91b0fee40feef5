import pytest

from pharmacy_api.services.drug_search import DrugSearchService, unique_cards

from fixtures import IBUPROFEN_LABEL, TYLENOL_LABEL


@pytest.fixture
def service(label_client):
    return DrugSearchService(label_client=label_client)


def test_unique_cards_drops_repeated_ids():
    cards = unique_cards([IBUPROFEN_LABEL, TYLENOL_LABEL, IBUPROFEN_LABEL])

    assert [card["id"] for card in cards] == ["label-ibuprofen", "label-tylenol"]


@pytest.mark.anyio
async def test_prefix_search_returns_cards(service):
    result = await service.search("adv", "en")

    assert [card["name"] for card in result["drugs"]] == ["Advil"]
    assert result["drugs"][0]["dosageForm"] == "ORAL"
    assert "translationInfo" not in result
    assert "suggestions" not in result


@pytest.mark.anyio
async def test_regional_name_is_retried_and_reported(service, label_client):
    result = await service.search("panadol", "en")

    assert [card["id"] for card in result["drugs"]] == ["label-tylenol"]
    info = result["translationInfo"]
    assert info["original"] == "panadol"
    assert info["translated"] == "tylenol"
    assert "tylenol" in info["message"]
    assert label_client.queried("wildcard") == ["panadol", "tylenol"]


@pytest.mark.anyio
async def test_translation_message_follows_language(service):
    result = await service.search("panadol", "ar")

    assert result["translationInfo"]["message"].startswith("عرض النتائج")


@pytest.mark.anyio
async def test_no_results_offers_suggestions(service):
    result = await service.search("something for headache", "en")

    assert result["drugs"] == []
    assert [s["suggestion"] for s in result["suggestions"]] == ["acetaminophen", "ibuprofen", "aspirin"]
    assert result["message"] == 'No drugs found for "something for headache".'


@pytest.mark.anyio
async def test_unknown_query_has_empty_suggestions(service):
    result = await service.search("xyzabc123", "en")

    assert result["drugs"] == []
    assert result["suggestions"] == []
    assert "xyzabc123" in result["message"]


@pytest.mark.anyio
async def test_blank_query_returns_empty_list(service, label_client):
    assert await service.search("  ", "en") == {"drugs": []}
    assert label_client.calls == []
