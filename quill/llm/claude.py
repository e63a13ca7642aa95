"""Claude (Anthropic) LLM Client"""

import os

from quill.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY env var."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 4096
    TEMPERATURE = 0.4

    def __init__(self, model: str | None = None, api_key: str | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL

        if not self.api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        from anthropic import Anthropic
        self._client = Anthropic(api_key=self.api_key)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def _complete(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(
            content=content.strip(),
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )

    def list_models(self) -> list[str]:
        from anthropic import APIError

        try:
            return [model.id for model in self._client.models.list()]
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

    def close(self) -> None:
        self._client.close()
