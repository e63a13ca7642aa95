"""Prompt Construction Package"""

from quill.prompts.builder import (
    PromptBuilder,
    ChangelogRequest,
    clean_response,
    clean_commit_message,
    UNRELEASED_HEADER,
)
from quill.prompts.templates import DEFAULT_COMMIT_PROMPT, DEFAULT_CHANGELOG_PROMPT, MERGE_RULES

__all__ = [
    "PromptBuilder",
    "ChangelogRequest",
    "clean_response",
    "clean_commit_message",
    "UNRELEASED_HEADER",
    "DEFAULT_COMMIT_PROMPT",
    "DEFAULT_CHANGELOG_PROMPT",
    "MERGE_RULES",
]
