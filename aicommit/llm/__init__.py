"""LLM Client Package"""

from aicommit.config import RunConfig
from aicommit.llm.base import LLMClient, ProviderError
from aicommit.llm.claude import ANTHROPIC_MODELS, AnthropicError, ClaudeClient
from aicommit.llm.ollama import DEFAULT_CLOUD_MODEL, OllamaClient, OllamaError, list_local_models
from aicommit.llm.openai_responses import OPENAI_MODELS, OpenAIClient, OpenAIError

PROVIDERS = {
    "anthropic": ClaudeClient,
    "openai": OpenAIClient,
    "ollama": OllamaClient,
}


def get_client(config: RunConfig) -> LLMClient:
    """Client for the provider named in the run config."""
    try:
        client_class = PROVIDERS[config.provider]
    except KeyError:
        raise ProviderError(f"Unknown provider: {config.provider}. Use 'ollama', 'anthropic' or 'openai'.")
    return client_class(config)


__all__ = [
    "LLMClient",
    "ProviderError",
    "AnthropicError",
    "OllamaError",
    "OpenAIError",
    "ClaudeClient",
    "OllamaClient",
    "OpenAIClient",
    "get_client",
    "list_local_models",
    "PROVIDERS",
    "ANTHROPIC_MODELS",
    "OPENAI_MODELS",
    "DEFAULT_CLOUD_MODEL",
]
