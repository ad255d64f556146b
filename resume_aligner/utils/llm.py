"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for LLM API calls with automatic retries
and utilities for parsing structured JSON responses.
"""

import json
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = 5
BASE_DELAY = 1.0
DEFAULT_MAX_TOKENS = 8192

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "API overloaded")
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "gemini", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Set self._retry_message for logging during retries
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _retry_message: str

    name: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> LLMResponse:
        """
        Generate a response from the LLM with automatic retry on transient errors.

        Args:
            system_prompt: System instruction for the model
            user_prompt: User message
            json_mode: Ask the provider to constrain output to JSON where supported
        """
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt, json_mode),
            self._retryable_exception,
            self._retry_message,
        )


class GeminiProvider(LLMProvider):
    """Google Gemini provider with exponential backoff retry."""

    _provider_prefix = "gemini"
    _retry_message = "Server error"

    def __init__(self, model: str = "gemini-2.5-flash", max_tokens: int = DEFAULT_MAX_TOKENS):
        # Lazy import - only load the SDK if this provider is used
        try:
            from google import genai
            from google.genai import errors, types
        except ImportError:
            raise ImportError("google-genai package required. Install with: pip install google-genai")

        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY (or API_KEY) environment variable not set")

        self.client = genai.Client(api_key=api_key)
        self._types = types
        self._retryable_exception = errors.ServerError
        self.max_tokens = max_tokens
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        config = self._types.GenerateContentConfig(
            system_instruction=system_prompt,
            max_output_tokens=self.max_tokens,
            response_mime_type="application/json" if json_mode else None,
        )
        response = self.client.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=config,
        )
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            model=self.model,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514", max_tokens: int = DEFAULT_MAX_TOKENS):
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.InternalServerError
        self.max_tokens = max_tokens
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        # No native JSON mode; the prompt carries the format instructions
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with exponential backoff retry."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(self, model: str = "gpt-4o", max_tokens: int = DEFAULT_MAX_TOKENS):
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.max_tokens = max_tokens
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, json_mode: bool) -> LLMResponse:
        kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **kwargs,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---

PROVIDERS = {
    "gemini": GeminiProvider,
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: str = None, model: str = None, max_tokens: int = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "gemini", "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific default)
        max_tokens: Output token limit (default: DEFAULT_MAX_TOKENS)

    Returns:
        LLMProvider instance

    Raises:
        ValueError: If the provider name is unknown
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "gemini")
    provider_name = provider_name.lower()

    if provider_name not in PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(sorted(PROVIDERS))}"
        )

    kwargs = {}
    if model:
        kwargs["model"] = model
    if max_tokens:
        kwargs["max_tokens"] = max_tokens
    return PROVIDERS[provider_name](**kwargs)


# --- Response Parsing Utilities ---


def parse_json_object(text: str) -> dict:
    """
    Parse a JSON object from an LLM response with robust fallback parsing.

    Handles bare JSON, JSON wrapped in markdown code fences, and JSON embedded
    in surrounding prose (outermost braces).

    Args:
        text: LLM response text

    Returns:
        Parsed dict, or an empty dict if no JSON object could be recovered
    """
    text = text.strip()

    try:
        result = json.loads(text)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    # Strip markdown code fences
    unfenced = re.sub(r"^```(?:json)?\s*", "", text)
    unfenced = re.sub(r"\s*```$", "", unfenced)
    try:
        result = json.loads(unfenced)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    # Outermost braces
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    return {}
