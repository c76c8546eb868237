"""
aicommit

AI-powered git commit messages from staged changes, using a local Ollama
server, Ollama Cloud, Anthropic or OpenAI.
"""

__version__ = "1.0.0"

# Provider identifiers - single source of truth
# Used by: config (validation), resolve (precedence), llm (client registry)
PROVIDERS = ("ollama", "anthropic", "openai")
OLLAMA_MODES = ("local", "cloud")

PROVIDER_LABELS = {
    'anthropic': 'Anthropic',
    'openai': 'OpenAI',
}


def provider_label(provider: str, ollama_mode: str | None = None) -> str:
    """Human-readable provider name for status lines."""
    if provider in PROVIDER_LABELS:
        return PROVIDER_LABELS[provider]
    return 'Ollama Cloud' if ollama_mode == 'cloud' else 'Local (Ollama)'
