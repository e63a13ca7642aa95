"""Test helpers: git shortcuts, a fake LLM client and scripted terminal input."""

import subprocess

from quill.llm import LLMResponse
from quill.llm.base import LLMClient

COMMIT_RESPONSE = "feat: add greeting module\n\n- add hello function"
CHANGELOG_RESPONSE = "## [1.1.0] - 2026-01-01\n\n### Added\n- Greeting module"
MERGE_RESPONSE = "# Changelog\n\n## [1.1.0] - 2026-01-01\n\n### Added\n- Greeting module\n\n## [1.0.0]\n- Initial"

# Checked in order; the first marker found in the prompt picks the response
DEFAULT_RESPONSES = {
    "Merge the following new changelog entry": MERGE_RESPONSE,
    "Generate a changelog for the following commits": CHANGELOG_RESPONSE,
    "Generate a commit message for the following diff": COMMIT_RESPONSE,
}


def git(path, *args) -> str:
    result = subprocess.run(['git', *args], cwd=path, check=True, capture_output=True, text=True)
    return result.stdout


def commit_file(path, name, content, message):
    """Write a file, stage it and commit. Returns the new HEAD hash."""
    target = path / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding='utf-8')
    git(path, 'add', name)
    git(path, 'commit', '-m', message)
    return git(path, 'rev-parse', 'HEAD').strip()


def head_subject(path) -> str:
    return git(path, 'log', '-1', '--format=%s').strip()


def commit_count(path) -> int:
    return int(git(path, 'rev-list', '--count', 'HEAD').strip())


class FakeClient(LLMClient):
    """Answers prompts from a marker table and records what it was asked."""

    def __init__(self, responses=None):
        # Overrides are checked before the defaults
        self.responses = dict(responses or {})
        for marker, content in DEFAULT_RESPONSES.items():
            self.responses.setdefault(marker, content)
        self.prompts = []
        self.closed = 0

    @property
    def name(self) -> str:
        return "Fake (test)"

    def _complete(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        for marker, content in self.responses.items():
            if marker in prompt:
                return LLMResponse(content=content, model="fake", tokens_used=len(content) // 4)
        return LLMResponse(content="")

    def list_models(self) -> list[str]:
        return ["fake-small", "fake-large"]

    def close(self) -> None:
        self.closed += 1


class ScriptedInput:
    """Stands in for input(): returns queued answers, then behaves like EOF."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, prompt: str) -> str:
        self.questions.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)
