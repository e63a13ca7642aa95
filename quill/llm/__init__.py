"""LLM Client Package"""

from quill.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, validate_commit_message
from quill.llm.claude import ClaudeClient
from quill.llm.ollama import OllamaClient
from quill.llm.providers import PROVIDERS, LISTED_PROVIDERS, get_client
from quill.llm.backend import GenerationBackend, register_cleanup

__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OllamaClient",
    "GenerationBackend",
    "get_client",
    "register_cleanup",
    "PROVIDERS",
    "LISTED_PROVIDERS",
    "SYSTEM_PROMPT",
    "validate_commit_message",
]
