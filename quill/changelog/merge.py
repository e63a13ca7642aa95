"""Changelog Merge Policy - combine a new entry with an existing CHANGELOG.md."""

from enum import Enum
from typing import Callable

from quill.changelog.document import ChangelogDocument
from quill.config import ModelSpec
from quill.llm import GenerationBackend, LLMError
from quill.output import Spinner
from quill.prompts import PromptBuilder, clean_response


class MergeChoice(Enum):
    MERGE = "merge"
    OVERWRITE = "overwrite"
    ABANDON = "abandon"


class MergeOutcome(Enum):
    CREATED = "created"
    MERGED = "merged"
    OVERWRITTEN = "overwritten"
    ABANDONED = "abandoned"

    @property
    def written(self) -> bool:
        return self is not MergeOutcome.ABANDONED


class ChangelogMergePolicy:
    """Writes a new entry into the changelog according to the caller's choice.

    The caller supplies `choose`, which is only consulted when a changelog
    already exists. Merging is delegated to the generation backend; the
    document itself is never parsed here.
    """

    def __init__(self, backend: GenerationBackend, model: ModelSpec, builder: PromptBuilder | None = None):
        self.backend = backend
        self.model = model
        self.builder = builder or PromptBuilder()

    def merge(self, existing: str, new_entry: str) -> str:
        prompt = self.builder.build_merge(existing, new_entry)
        try:
            with Spinner("Merging changelog...", "Merged changelog"):
                merged = self.backend.generate(prompt, self.model)
        except LLMError as e:
            raise LLMError(f"AI changelog merge failed: {e}")
        return clean_response(merged)

    def reconcile(self, document: ChangelogDocument, new_entry: str,
                  choose: Callable[[], MergeChoice]) -> MergeOutcome:
        existing = document.read()
        if existing is None:
            document.write(new_entry)
            return MergeOutcome.CREATED

        choice = choose()
        if choice is MergeChoice.MERGE:
            document.write(self.merge(existing, new_entry))
            return MergeOutcome.MERGED
        if choice is MergeChoice.OVERWRITE:
            document.write(new_entry)
            return MergeOutcome.OVERWRITTEN
        return MergeOutcome.ABANDONED
