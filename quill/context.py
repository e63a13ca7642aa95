"""The per-invocation context handed to every workflow."""

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from quill import CHANGELOG_FILENAME
from quill.changelog import ChangelogDocument, ChangelogHistoryStore, ChangelogMergePolicy
from quill.cli.interactive import Prompter
from quill.config import Config, ConfigManager
from quill.git import GitRepository, RefResolver, VersionDetector
from quill.llm import GenerationBackend
from quill.prompts import PromptBuilder


@dataclass
class QuillContext:
    """Collaborators for one command run against one repository.

    Tests build this directly with a fake backend and a scripted prompter.
    """
    repo: GitRepository
    settings: ConfigManager
    backend: GenerationBackend
    prompter: Prompter
    builder: PromptBuilder = field(default_factory=PromptBuilder)

    @classmethod
    def create(cls, working_dir: Path | None = None, verbose: bool = False) -> 'QuillContext':
        working_dir = Path(working_dir) if working_dir else Path.cwd()
        return cls(
            repo=GitRepository(working_dir),
            settings=ConfigManager(working_dir),
            backend=GenerationBackend(verbose=verbose),
            prompter=Prompter(),
        )

    @cached_property
    def config(self) -> Config:
        return self.settings.load().with_env_overrides()

    @cached_property
    def refs(self) -> RefResolver:
        return RefResolver(self.repo)

    @cached_property
    def versions(self) -> VersionDetector:
        return VersionDetector(self.repo)

    @cached_property
    def history(self) -> ChangelogHistoryStore:
        return ChangelogHistoryStore(self.settings.history_path)

    @cached_property
    def changelog(self) -> ChangelogDocument:
        return ChangelogDocument(self.repo.root() / CHANGELOG_FILENAME)

    @cached_property
    def merge_policy(self) -> ChangelogMergePolicy:
        return ChangelogMergePolicy(self.backend, self.config.changelog_model, self.builder)
