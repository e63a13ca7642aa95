"""Shared fixtures: throwaway git repositories and contexts wired to fakes."""

import shutil

import pytest

from quill.cli.interactive import Prompter
from quill.config import ConfigManager
from quill.context import QuillContext
from quill.git import GitRepository
from quill.llm import GenerationBackend

from tests.helpers import FakeClient, ScriptedInput, git


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment from leaking into model selection."""
    for var in ('QUILL_COMMIT_MODEL', 'QUILL_CHANGELOG_MODEL', 'QUILL_TIMEOUT', 'OLLAMA_HOST'):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def git_repo(tmp_path):
    """An initialized repository on branch main with no commits."""
    if shutil.which('git') is None:
        pytest.skip("git is not installed")
    path = tmp_path / "repo"
    path.mkdir()
    git(path, 'init', '-b', 'main')
    git(path, 'config', 'user.name', 'Quill Tests')
    git(path, 'config', 'user.email', 'tests@example.com')
    git(path, 'config', 'commit.gpgsign', 'false')
    git(path, 'config', 'tag.gpgsign', 'false')
    return path


@pytest.fixture
def bare_remote(tmp_path, git_repo):
    """A bare repository registered as origin of git_repo."""
    path = tmp_path / "remote.git"
    git(tmp_path, 'init', '--bare', str(path))
    git(git_repo, 'remote', 'add', 'origin', str(path))
    return path


@pytest.fixture
def make_context():
    """Return a factory building a QuillContext over a path with fakes plugged in.

    The fake client and scripted input are attached as ctx.fake_client and
    ctx.scripted for assertions.
    """
    def _make(path, answers=(), responses=None, verbose=False):
        client = FakeClient(responses)
        scripted = ScriptedInput(answers)
        ctx = QuillContext(
            repo=GitRepository(path),
            settings=ConfigManager(path),
            backend=GenerationBackend(client_factory=lambda provider, model: client, verbose=verbose),
            prompter=Prompter(input_fn=scripted),
        )
        ctx.fake_client = client
        ctx.scripted = scripted
        return ctx
    return _make
