"""OpenAI LLM Client (Responses API)"""

import openai

from aicommit.config import RunConfig
from aicommit.llm.base import LLMClient, ProviderError, log_payload
from aicommit.prompts import SYSTEM_PROMPT, build_user_prompt

OPENAI_MODELS = [
    ("codex-mini-latest", "fast Codex model - recommended"),
    ("gpt-4o", "balanced - most capable"),
    ("gpt-4o-mini", "fast & cheap"),
]


class OpenAIError(ProviderError):
    """Raised when an OpenAI API request fails."""
    pass


def _error_detail(e: openai.APIStatusError) -> str:
    body = e.body
    if isinstance(body, dict):
        # The SDK usually unwraps {"error": {...}} already
        err = body.get("error", body)
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
    return f"{e.status_code} {e.message}"


def _extract_text(response) -> str | None:
    """``output_text``, falling back to the first content block of the first output item."""
    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text:
        return text
    try:
        return response.output[0].content[0].text
    except (AttributeError, IndexError, TypeError):
        return None


class OpenAIClient(LLMClient):
    """OpenAI Responses API client. Needs an API key in the run config."""

    MAX_OUTPUT_TOKENS = 256

    def __init__(self, config: RunConfig, client: openai.OpenAI | None = None):
        self.model = config.model
        self._client = client or openai.OpenAI(
            api_key=config.api_key,
            base_url=config.url.removesuffix("/responses"),
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, diff: str, config: RunConfig) -> str:
        request = {
            "model": config.model,
            "instructions": SYSTEM_PROMPT,
            "input": build_user_prompt(diff),
            "max_output_tokens": self.MAX_OUTPUT_TOKENS,
            "store": False,
        }
        log_payload(config, "OpenAI request body", request)

        try:
            response = self._client.responses.create(**request)
        except openai.APIConnectionError as e:
            raise OpenAIError(f"Could not connect to OpenAI API: {e.message}")
        except openai.APIStatusError as e:
            raise OpenAIError(f"OpenAI API error: {_error_detail(e)}")
        except openai.APIError as e:
            raise OpenAIError(f"OpenAI API error: {e.message}")

        log_payload(config, "OpenAI response", response.model_dump())

        text = _extract_text(response)
        if not isinstance(text, str):
            raise OpenAIError("Unexpected response from OpenAI API: missing content")
        return text.strip()
