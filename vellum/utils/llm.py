"""
LLM provider abstraction.

Provides a provider-agnostic interface for LLM API calls that return
schema-constrained JSON text. Calls are made exactly once: failures surface
to the caller as UpstreamError, and the caller decides whether to re-invoke.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from vellum.utils.exceptions import UpstreamError

load_dotenv()

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


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
    - Set _provider_prefix class attribute (e.g., "openai")
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(
        self, system_prompt: str, user_prompt: str, schema_name: str, schema: dict
    ) -> LLMResponse:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate_json(
        self, system_prompt: str, user_prompt: str, schema_name: str, schema: dict
    ) -> LLMResponse:
        """
        Generate a JSON response constrained to a strict JSON schema.

        Args:
            system_prompt: Instructions for the model
            user_prompt: Request payload (usually serialized JSON)
            schema_name: Name reported to the provider for the schema
            schema: JSON schema the output must match

        Returns:
            LLMResponse whose content is the raw model output text
        """
        return self._call_api(system_prompt, user_prompt, schema_name, schema)


class OpenAIProvider(LLMProvider):
    """OpenAI provider using strict json_schema structured outputs."""

    _provider_prefix = "openai"

    def __init__(self, model: str = None, api_key: str = None):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self._openai = openai
        self.client = openai.OpenAI(api_key=api_key)
        self.update_model(model or os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL)

    def _call_api(
        self, system_prompt: str, user_prompt: str, schema_name: str, schema: dict
    ) -> LLMResponse:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": schema_name, "strict": True, "schema": schema},
                },
            )
        except self._openai.OpenAIError as e:
            raise UpstreamError(f"{self.name} request failed: {e}") from e

        usage = response.usage
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


# --- Provider Factory ---


def llm_is_configured() -> bool:
    """Whether an external text-generation credential is configured."""
    return bool(os.getenv("OPENAI_API_KEY", "").strip())


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: Provider identifier (default: from LLM_PROVIDER env var, "openai")
        model: Model name (default: OPENAI_MODEL env var, then provider default)

    Returns:
        LLMProvider instance

    Raises:
        UpstreamError: If the provider name is not supported
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai").lower()

    if provider_name == "openai":
        return OpenAIProvider(model=model)
    else:
        raise UpstreamError(f"Unknown LLM provider: {provider_name}. Use 'openai'")
