import pytest

from pharmacy_api.name_resolution import MAX_SUGGESTIONS, alternatives_for, resolve, suggest


@pytest.mark.parametrize(
    "query,expected",
    [
        ("paracetamol", "acetaminophen"),
        ("  Paracetamol ", "acetaminophen"),
        ("acetaminophen", "acetaminophen"),
        ("salbutamol", "albuterol"),
        ("panadol", "tylenol"),
        ("Vitamin   C", "ascorbic acid"),
    ],
)
def test_resolve_known_names(query, expected):
    assert resolve(query) == expected


def test_resolve_matches_compound_names_by_substring():
    assert resolve("panadol extra") == "tylenol"


@pytest.mark.parametrize("query", ["xyzabc123", "", "   "])
def test_resolve_unknown_returns_none(query):
    assert resolve(query) is None


def test_suggest_offers_us_name():
    suggestions = suggest("paracetamol")

    assert suggestions == [
        {
            "original": "paracetamol",
            "suggestion": "acetaminophen",
            "description": 'Commonly known as "acetaminophen" in the US',
        }
    ]


def test_suggest_falls_back_to_symptom_keywords():
    suggestions = suggest("something for my headache")

    assert [s["suggestion"] for s in suggestions] == ["acetaminophen", "ibuprofen", "aspirin"]
    assert all(s["description"] == "Common medication for headache" for s in suggestions)


def test_suggest_is_capped():
    assert len(suggest("pain and fever")) <= MAX_SUGGESTIONS


def test_suggest_nothing_for_unknown_query():
    assert suggest("xyzabc123") == []


def test_alternatives_for_known_and_unknown_drugs():
    assert alternatives_for("Ibuprofen") == ["acetaminophen", "naproxen", "aspirin", "diclofenac"]
    assert alternatives_for("unknown-drug") == []
