"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from quill import COMMIT_TYPE_NAMES
from quill.errors import QuillError


SYSTEM_PROMPT = """You are a senior software engineer who maintains the git history and release notes of a busy project.

Your standards:
- Follow the instructions and format you are given exactly
- Every word earns its place, no filler
- The diff or commit list shows WHAT changed; you explain it for the reader of the history
- Return only the requested text, never commentary about it"""

# (is_valid, reason) for a candidate response; reason is shown to the model on retry
Validator = Callable[[str], tuple[bool, str]]


def validate_commit_message(content: str) -> tuple[bool, str]:
    """Validate that response looks like a proper commit message."""
    if not content or len(content.strip()) < 10:
        return False, "Response too short"

    types_pattern = '|'.join(COMMIT_TYPE_NAMES)
    pattern = rf'^({types_pattern})(\(.+\))?!?:'
    first_line = content.strip().split('\n')[0]

    if not re.match(pattern, first_line):
        return False, (
            f"Missing conventional commit format. Got: {first_line[:50]}. "
            "Start directly with the commit type, e.g., 'feat:'"
        )

    return True, ""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(QuillError):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    MAX_RETRIES = 2

    @abstractmethod
    def _complete(self, prompt: str) -> LLMResponse:
        """Send one prompt and return the raw response."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def list_models(self) -> list[str]:
        return []

    def close(self) -> None:
        pass

    def generate(self, prompt: str, validate: Validator | None = None) -> LLMResponse:
        """Generate a response, re-asking when validate rejects it.

        After MAX_RETRIES the last response is returned even if invalid.
        """
        last_error = ""
        response = None
        for attempt in range(self.MAX_RETRIES + 1):
            retry_prompt = prompt
            if attempt > 0:
                retry_prompt = f"{prompt}\n\nIMPORTANT: Your previous response was invalid. {last_error}"

            response = self._complete(retry_prompt)
            if validate is None:
                return response

            is_valid, error = validate(response.content)
            if is_valid:
                return response
            last_error = error

        return response
