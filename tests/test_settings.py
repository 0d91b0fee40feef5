import pytest

from pharmacy_api.config import get_settings


def test_defaults(monkeypatch):
    for name in ("GROQ_API_KEY", "OPENAI_API_KEY", "API_PREFIX", "AI_FAILURE_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.api_prefix == "/api/v1"
    assert settings.ai_timeout_seconds == 20.0
    assert settings.drug_cache_ttl_seconds == 300
    assert settings.translation_cache_ttl_seconds == 120
    assert [p.name for p in settings.providers] == ["groq", "openai"]
    assert settings.providers[0].model == "llama-3.3-70b-versatile"
    assert all(p.api_key == "" for p in settings.providers)


def test_provider_overrides(monkeypatch):
    monkeypatch.setenv("AI_PRIMARY_BASE_URL", "https://llm.internal/v1/")
    monkeypatch.setenv("AI_PRIMARY_MODEL", "local-model")
    monkeypatch.setenv("AI_PRIMARY_API_KEY_ENV", "LOCAL_LLM_KEY")
    monkeypatch.setenv("LOCAL_LLM_KEY", "secret")

    primary = get_settings().providers[0]

    assert primary.base_url == "https://llm.internal/v1"
    assert primary.model == "local-model"
    assert primary.api_key == "secret"


def test_cors_origins_are_split(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test,http://b.test")

    assert get_settings().cors_origins == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize("value", ["0", "-1"])
def test_failure_threshold_must_be_positive(monkeypatch, value):
    monkeypatch.setenv("AI_FAILURE_THRESHOLD", value)

    with pytest.raises(ValueError):
        get_settings()
