import pydantic
import pytest

from adam_llm.config import DEFAULT_TITLE_MODELS, Settings


class TestSettings:

    def test_from_env(self, mock_env, monkeypatch):
        monkeypatch.setenv("ADAM_TITLE_MODEL_GOOGLE", "gemini-2.5-flash")

        settings = Settings.from_env()

        assert settings.anthropic_api_key == "sk-test-anthropic"
        assert settings.grok_api_key == "gsk-test-grok"
        assert settings.google_api_key == "AIza-test-google"
        assert settings.llama_api_url == "http://localhost:8080/v1"
        assert settings.title_model_google == "gemini-2.5-flash"
        assert settings.title_model_anthropic == DEFAULT_TITLE_MODELS["anthropic"]

    def test_missing_credentials_are_empty(self, monkeypatch):
        for name in ("ANTHROPIC_API_KEY", "GROK_API_KEY", "GOOGLE_API_KEY", "LLAMA_API_URL", "LLAMA_API_KEY"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.anthropic_api_key == ""
        assert settings.llama_api_url == ""
        assert settings.llama_api_key is None

    def test_frozen(self, settings):
        with pytest.raises(pydantic.ValidationError):
            settings.grok_api_key = "other"
