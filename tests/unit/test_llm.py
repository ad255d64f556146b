"""
Unit tests for the LLM provider layer.

Tests the retry wrapper, provider factory and JSON response parsing in
resume_aligner.utils.llm. No network calls are made.
"""

import pytest

from resume_aligner.utils import llm
from resume_aligner.utils.llm import get_provider, parse_json_object


class TestParseJsonObject:
    """Tests for parse_json_object function."""

    def test_bare_json(self):
        """Test a plain JSON object."""
        assert parse_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_json(self):
        """Test JSON inside a ```json fence."""
        assert parse_json_object('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_fenced_without_language(self):
        """Test JSON inside a bare ``` fence."""
        assert parse_json_object('```\n{"a": true}\n```') == {"a": True}

    def test_embedded_in_prose(self):
        """Test a JSON object surrounded by prose."""
        assert parse_json_object('Here you go: {"a": "b"} Hope this helps.') == {"a": "b"}

    def test_not_json(self):
        """Test that non-JSON text gives an empty dict."""
        assert parse_json_object("I cannot help with that.") == {}

    def test_array_is_not_an_object(self):
        """Test that a top-level array gives an empty dict."""
        assert parse_json_object("[1, 2, 3]") == {}


class TestGenerate:
    """Tests for retry behavior in LLMProvider.generate."""

    def test_retries_transient_errors(self, make_provider, monkeypatch):
        """Test that connection errors are retried until success."""
        monkeypatch.setattr(llm.time, "sleep", lambda seconds: None)
        provider = make_provider(ConnectionError("busy"), ConnectionError("busy"), "ok")

        response = provider.generate("system", "user", json_mode=True)

        assert response.content == "ok"
        assert len(provider.calls) == 3
        assert provider.calls[0]["json_mode"] is True

    def test_gives_up_after_max_retries(self, make_provider, monkeypatch):
        """Test that the last transient error is re-raised."""
        monkeypatch.setattr(llm.time, "sleep", lambda seconds: None)
        provider = make_provider(*[ConnectionError("busy")] * llm.MAX_RETRIES)

        with pytest.raises(ConnectionError):
            provider.generate("system", "user")
        assert len(provider.calls) == llm.MAX_RETRIES

    def test_other_errors_not_retried(self, make_provider):
        """Test that non-transient errors propagate immediately."""
        provider = make_provider(KeyError("bad"), "unused")
        with pytest.raises(KeyError):
            provider.generate("system", "user")
        assert len(provider.calls) == 1

    def test_update_model_refreshes_name(self, make_provider):
        """Test that the provider name follows the model."""
        provider = make_provider()
        assert provider.name == "fake/fake-model"
        provider.update_model("other")
        assert provider.name == "fake/other"


class TestGetProvider:
    """Tests for get_provider function."""

    def test_unknown_provider(self):
        """Test that an unregistered provider name raises ValueError."""
        with pytest.raises(ValueError, match="Unknown provider: mistral"):
            get_provider("mistral")

    def test_name_case_insensitive(self, monkeypatch):
        """Test provider names in any case and constructor arguments."""
        created = {}

        class Recorder:
            def __init__(self, **kwargs):
                created.update(kwargs)

        monkeypatch.setitem(llm.PROVIDERS, "openai", Recorder)
        provider = get_provider("OpenAI", model="gpt-4o-mini", max_tokens=100)

        assert isinstance(provider, Recorder)
        assert created == {"model": "gpt-4o-mini", "max_tokens": 100}

    def test_default_from_environment(self, monkeypatch):
        """Test LLM_PROVIDER as the default provider."""
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        monkeypatch.setitem(llm.PROVIDERS, "anthropic", lambda **kwargs: "anthropic-instance")
        assert get_provider() == "anthropic-instance"

    def test_missing_api_key(self, monkeypatch):
        """Test the error when the provider API key is missing."""
        pytest.importorskip("openai")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            get_provider("openai")
