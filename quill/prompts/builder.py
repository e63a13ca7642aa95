"""Prompt Builder - Construct LLM prompts for commits, changelogs and merges."""

import re
from dataclasses import dataclass

from quill import COMMIT_TYPE_NAMES
from quill.git.repository import CommitRecord
from quill.prompts.templates import MERGE_RULES

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

UNRELEASED_HEADER = "[Unreleased]"

# Lines that mark the end of a commit message in a chatty response
_JUNK_PATTERNS = re.compile(r'^(diff --git |@@\s|[+-]{3}\s[ab]/|index [0-9a-f]|```)')


@dataclass
class ChangelogRequest:
    """Everything the changelog prompt needs about one commit range."""
    commits: list[CommitRecord]
    from_ref: str
    to_ref: str
    version: str | None = None


class PromptBuilder:
    """Joins a user template with the task-specific payload."""

    SEPARATOR = "---"

    def build_commit(self, template: str, diff: str) -> str:
        sections = [
            template.strip(),
            self.SEPARATOR,
            "Generate a commit message for the following diff:",
            f"```diff\n{diff.rstrip()}\n```",
        ]
        return "\n\n".join(sections)

    def build_changelog(self, template: str, request: ChangelogRequest) -> str:
        sections = [
            template.strip(),
            self.SEPARATOR,
            f"Generate a changelog for the following commits (from {request.from_ref} to {request.to_ref}):",
            f"IMPORTANT: {self._version_instruction(request.version)}",
            self._commit_list(request.commits),
        ]
        return "\n\n".join(filter(None, sections))

    def build_merge(self, existing: str, new_entry: str) -> str:
        rules = "\n".join(f"{i}. {rule}" for i, rule in enumerate(MERGE_RULES, 1))
        sections = [
            "Merge the following new changelog entry into the existing CHANGELOG.md.",
            f"Rules:\n{rules}",
            f"Existing CHANGELOG.md:\n```markdown\n{existing.rstrip()}\n```",
            f"New entry to add:\n```markdown\n{new_entry.rstrip()}\n```",
        ]
        return "\n\n".join(sections)

    def _version_instruction(self, version: str | None) -> str:
        if version:
            return f'Use version "{version}" for this changelog entry.'
        return f'Use "{UNRELEASED_HEADER}" as the version header.'

    def _commit_list(self, commits: list[CommitRecord]) -> str:
        return "\n".join(f"- {c.short_hash}: {c.message}" for c in commits)


def clean_response(text: str) -> str:
    """Strip a surrounding markdown code fence from a response."""
    text = text.strip()
    text = re.sub(r'^```[\w-]*\n?', '', text)
    text = re.sub(r'\n?```$', '', text)
    return text.strip()


def clean_commit_message(text: str) -> str:
    """Clean up LLM response to extract just the commit message."""
    lines = text.strip().split('\n')
    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break

    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if _JUNK_PATTERNS.match(lines[i]):
            end_idx = i
            break

    lines = '\n'.join(lines[start_idx:end_idx]).rstrip().split('\n')
    lines[0] = lines[0].strip('`').strip()
    return '\n'.join(lines)
