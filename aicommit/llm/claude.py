"""Claude (Anthropic) LLM Client"""

import anthropic

from aicommit.config import RunConfig
from aicommit.llm.base import LLMClient, ProviderError, log_payload
from aicommit.prompts import SYSTEM_PROMPT, build_user_prompt

ANTHROPIC_MODELS = [
    ("claude-sonnet-4-6", "balanced - recommended"),
    ("claude-haiku-4-5-20251001", "fast & cheap - free tier friendly"),
    ("claude-opus-4-6", "most capable"),
]


class AnthropicError(ProviderError):
    """Raised when an Anthropic API request fails."""
    pass


def _error_detail(e: anthropic.APIStatusError) -> str:
    """Prefer the API's own error message over the SDK's summary."""
    body = e.body
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
    return f"{e.status_code} {e.message}"


class ClaudeClient(LLMClient):
    """Anthropic Messages API client. Needs an API key in the run config."""

    MAX_TOKENS = 256

    def __init__(self, config: RunConfig, client: anthropic.Anthropic | None = None):
        self.model = config.model
        # SDK retries are off: a failed request is reported and the user decides
        self._client = client or anthropic.Anthropic(
            api_key=config.api_key,
            base_url=config.url.removesuffix("/v1/messages"),
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, diff: str, config: RunConfig) -> str:
        request = {
            "model": config.model,
            "max_tokens": self.MAX_TOKENS,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": build_user_prompt(diff)}],
        }
        log_payload(config, "Anthropic request body", request)

        try:
            response = self._client.messages.create(**request)
        except anthropic.APIConnectionError as e:
            raise AnthropicError(f"Could not connect to Anthropic API: {e.message}")
        except anthropic.APIStatusError as e:
            raise AnthropicError(f"Anthropic API error: {_error_detail(e)}")
        except anthropic.APIError as e:
            raise AnthropicError(f"Anthropic API error: {e.message}")

        log_payload(config, "Anthropic response", response.model_dump())

        text = None
        if response.content:
            text = getattr(response.content[0], "text", None)
        if not isinstance(text, str):
            raise AnthropicError("Unexpected response from Anthropic API: missing content")
        return text.strip()
