import pytest

from pharmacy_api.services.similar_drugs import SimilarDrugsService, name_patterns

NSAID_CLASS = "Nonsteroidal Anti-inflammatory Drug [EPC]"


@pytest.fixture
def service(label_client):
    return SimilarDrugsService(label_client=label_client)


def test_name_patterns_strip_dose_and_dedupe():
    assert name_patterns("Advil 200 mg") == ["advil", "advil 200 mg"]
    assert name_patterns("ibuprofen") == ["ibuprofen"]


@pytest.mark.anyio
async def test_similar_excludes_the_drug_itself(service):
    result = await service.find("ibuprofen", category=NSAID_CLASS)

    assert [card["id"] for card in result["similar"]] == ["label-aspirin"]


@pytest.mark.anyio
async def test_alternatives_come_from_table_and_skip_missing_labels(service, label_client):
    result = await service.find("ibuprofen")

    assert [card["name"] for card in result["alternatives"]] == ["Tylenol", "Bayer Aspirin"]
    assert label_client.queried("exact") == ["acetaminophen", "naproxen", "aspirin", "diclofenac"]


@pytest.mark.anyio
async def test_name_patterns_used_when_class_search_is_thin(service, label_client):
    await service.find("warfarin", category="Vitamin K Antagonist [EPC]")

    assert label_client.queried("class") == ["Vitamin K Antagonist [EPC]"]
    assert label_client.queried("wildcard") == ["warfarin"]


@pytest.mark.anyio
async def test_unknown_drug_returns_empty_lists(service):
    assert await service.find("xyzabc123") == {"similar": [], "alternatives": []}


@pytest.mark.anyio
async def test_blank_name_makes_no_calls(service, label_client):
    assert await service.find("  ") == {"similar": [], "alternatives": []}
    assert label_client.calls == []
