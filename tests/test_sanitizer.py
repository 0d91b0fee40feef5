import copy

import pytest

from pharmacy_api.sanitizer import (
    AI_SUMMARY_SCHEMA,
    CARD_SCHEMA,
    DRUG_SUMMARY_SCHEMA,
    INTERACTION_RESULT_SCHEMA,
    LocalizedList,
    LocalizedString,
    SEARCH_RESPONSE_SCHEMA,
    Text,
    sanitize,
)


LANGS = ("en", "ar", "ku")


@pytest.mark.parametrize("raw", [None, 42, "text", [], {}, {"aiSummary": None}, {"rawDetails": "oops"}])
def test_drug_summary_is_total(raw):
    result = sanitize(raw, DRUG_SUMMARY_SCHEMA)

    assert set(result["aiSummary"]) == set(AI_SUMMARY_SCHEMA)
    for task, value in result["aiSummary"].items():
        assert set(value) == set(LANGS)
        for items in value.values():
            assert isinstance(items, list)
            assert all(isinstance(item, str) for item in items)
    for key, value in result["rawDetails"].items():
        if key == "ingredients":
            assert set(value) == {"active", "inactive"}
        else:
            assert isinstance(value, str) and value


def test_missing_side_effects_uses_semantic_default():
    result = sanitize({}, AI_SUMMARY_SCHEMA)

    assert result["sideEffects"] == {
        "en": ["No common side effects listed."],
        "ar": ["غير متوفر"],
        "ku": ["بەردەست نییە"],
    }


def test_missing_language_key_gets_placeholder():
    field = LocalizedString()

    assert field.coerce({"en": "Hello"}) == {"en": "Hello", "ar": "غير متوفر", "ku": "بەردەست نییە"}


def test_missing_language_in_summary_gets_task_default():
    result = sanitize({"uses": {"en": ["Pain relief"]}}, AI_SUMMARY_SCHEMA)

    assert result["uses"]["en"] == ["Pain relief"]
    assert result["uses"]["ar"] == ["غير متوفر"]
    assert result["uses"]["ku"] == ["بەردەست نییە"]


def test_scalar_is_broadcast_to_every_language():
    assert LocalizedList().coerce("Headache") == {"en": ["Headache"], "ar": ["Headache"], "ku": ["Headache"]}
    assert LocalizedString().coerce("Hi") == {"en": "Hi", "ar": "Hi", "ku": "Hi"}


def test_bare_list_is_broadcast():
    assert LocalizedList().coerce(["a", "b"]) == {"en": ["a", "b"], "ar": ["a", "b"], "ku": ["a", "b"]}


def test_generic_name_fills_scientific_name():
    card = sanitize({"name": "Advil", "genericName": "IBUPROFEN"}, CARD_SCHEMA)

    assert card["scientificName"] == "IBUPROFEN"
    assert card["genericName"] == "IBUPROFEN"


def test_openfda_list_collapses_to_first_item():
    assert Text().coerce(["ADVIL", "ADVIL LIQUI-GELS"]) == "ADVIL"


def test_unknown_keys_pass_through_unchanged():
    raw = {"name": "Advil", "qrCode": "DRG-001", "extra": {"nested": [1, 2]}}

    card = sanitize(raw, CARD_SCHEMA)

    assert card["qrCode"] == "DRG-001"
    assert card["extra"] == {"nested": [1, 2]}


def test_input_is_not_mutated():
    raw = {"interactions": [{"severity": "SAFE", "title": "x"}], "overallRisk": None}
    snapshot = copy.deepcopy(raw)

    sanitize(raw, INTERACTION_RESULT_SCHEMA)

    assert raw == snapshot


def test_severity_is_normalized():
    result = sanitize(
        {"interactions": [{"severity": "major"}, {"severity": "safe"}, {"severity": "weird"}], "overallRisk": "Medium"},
        INTERACTION_RESULT_SCHEMA,
    )

    assert [item["severity"] for item in result["interactions"]] == ["critical", "minor", "unknown"]
    assert result["overallRisk"] == "moderate"
    assert result["interactions"][0]["title"]["en"] == "No interaction found"


@pytest.mark.parametrize(
    "schema,raw",
    [
        (DRUG_SUMMARY_SCHEMA, {"name": "Advil", "aiSummary": {"uses": "pain"}, "rawDetails": {"warnings": ["w"]}}),
        (INTERACTION_RESULT_SCHEMA, {"interactions": [{"severity": "SAFE", "recommendations": "Rest"}]}),
        (SEARCH_RESPONSE_SCHEMA, {"drugs": [{"name": "Advil"}, "junk"], "message": "none"}),
        (CARD_SCHEMA, None),
    ],
)
def test_sanitize_is_idempotent(schema, raw):
    once = sanitize(raw, schema)

    assert sanitize(once, schema) == once


def test_optional_fields_are_omitted_when_absent():
    result = sanitize({"drugs": []}, SEARCH_RESPONSE_SCHEMA)

    assert result == {"drugs": []}
