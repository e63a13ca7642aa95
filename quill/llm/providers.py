"""Provider registry."""

from quill.llm.base import LLMClient, LLMError
from quill.llm.claude import ClaudeClient
from quill.llm.ollama import OllamaClient

PROVIDERS = {
    "anthropic": ClaudeClient,
    "claude": ClaudeClient,
    "ollama": OllamaClient,
}

# Aliases are skipped when listing models
LISTED_PROVIDERS = ["anthropic", "ollama"]


def get_client(provider: str, model: str | None = None) -> LLMClient:
    """Get an LLM client for a provider name from PROVIDERS."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](model=model)

    raise LLMError(f"Unknown provider: {provider}. Use one of: {', '.join(sorted(PROVIDERS))}.")
