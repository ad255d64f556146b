"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from resume_aligner.contexts.editing.resume_data_structure import SequentialIdGenerator
from resume_aligner.utils.llm import LLMProvider, LLMResponse

FIXTURES_PATH = Path(__file__).parent / "fixtures"


class FakeProvider(LLMProvider):
    """LLM provider returning canned responses and recording the prompts it saw."""

    _provider_prefix = "fake"
    _retryable_exception = ConnectionError
    _retry_message = "Fake error"

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.update_model("fake-model")

    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt, "json_mode": json_mode})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return LLMResponse(content=response, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def full_resume_text():
    return (FIXTURES_PATH / "full_resume.txt").read_text(encoding="utf-8")


@pytest.fixture
def job_description_text():
    return (FIXTURES_PATH / "job_description.txt").read_text(encoding="utf-8")


@pytest.fixture
def logs_path(tmp_path, monkeypatch):
    """Redirect orchestration log directories into tmp_path."""
    from resume_aligner.contexts.editing import converter

    path = tmp_path / "logs"
    monkeypatch.setattr(converter, "LOGS_PATH", path)
    return path


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances: make_provider(response_text, ...)."""
    return lambda *responses: FakeProvider(responses)
