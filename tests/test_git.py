"""
Tests for git access: status parsing, history, refs, tags and version detection.

Run with:
    pytest tests/test_git.py -v
"""

import json

import pytest

from quill.git import GitError, GitRepository, RefResolutionError, RefResolver, VersionDetector
from quill.git.refs import majority_prefix
from quill.git.repository import parse_log, parse_porcelain_status
from quill.git.version import VersionChange, is_valid_version, parse_manifest_version, strip_version_prefix

from tests.helpers import commit_file, git


# ---------------------------------------------------------------------------
# Porcelain status parsing
# ---------------------------------------------------------------------------

class TestParsePorcelainStatus:
    """parse_porcelain_status() on `git status --porcelain -z` output."""

    def test_empty_output_is_clean(self):
        status = parse_porcelain_status("")
        assert status.is_clean
        assert not status.has_staged
        assert not status.has_unstaged

    def test_staged_modified_and_untracked(self):
        output = "M  staged.py\0 M changed.py\0?? new.py\0"
        status = parse_porcelain_status(output)

        assert status.staged == ("staged.py",)
        assert status.unstaged == ("changed.py",)
        assert status.untracked == ("new.py",)

    def test_partially_staged_file_counts_both_ways(self):
        status = parse_porcelain_status("MM both.py\0")
        assert status.staged == ("both.py",)
        assert status.unstaged == ("both.py",)

    def test_rename_skips_original_path(self):
        output = "R  new_name.py\0old_name.py\0A  added.py\0"
        status = parse_porcelain_status(output)
        assert status.staged == ("new_name.py", "added.py")

    def test_untracked_only_is_unstaged(self):
        status = parse_porcelain_status("?? notes.txt\0")
        assert status.has_unstaged
        assert not status.has_staged
        assert not status.is_clean


class TestParseLog:

    def test_parses_records(self):
        output = "abc123\x1fAda\x1f2026-01-01T00:00:00+00:00\x1ffeat: one\x1e\n" \
                 "def456\x1fBob\x1f2026-01-02T00:00:00+00:00\x1ffix: two\x1e\n"
        commits = parse_log(output)

        assert [c.hash for c in commits] == ["abc123", "def456"]
        assert commits[0].author == "Ada"
        assert commits[1].message == "fix: two"

    def test_skips_malformed_records(self):
        assert parse_log("garbage\x1e\n\x1e") == []


# ---------------------------------------------------------------------------
# GitRepository against a real repository
# ---------------------------------------------------------------------------

class TestGitRepository:

    def test_not_a_repo(self, tmp_path):
        repo = GitRepository(tmp_path)
        assert not repo.is_repo()
        with pytest.raises(GitError, match="Not a git repository"):
            repo.ensure_repo()

    def test_status_reflects_working_tree(self, git_repo):
        commit_file(git_repo, "a.txt", "one\n", "chore: init")
        (git_repo / "a.txt").write_text("two\n")
        (git_repo / "b.txt").write_text("new\n")

        status = GitRepository(git_repo).status()
        assert status.unstaged == ("a.txt",)
        assert status.untracked == ("b.txt",)
        assert not status.has_staged

    def test_stage_all_and_commit(self, git_repo):
        repo = GitRepository(git_repo)
        (git_repo / "a.txt").write_text("hello\n")

        repo.stage_all()
        assert repo.status().staged == ("a.txt",)
        assert "hello" in repo.staged_diff()

        repo.commit("feat: add a")
        assert repo.status().is_clean
        assert repo.recent_commits()[0].message == "feat: add a"

    def test_commits_between_is_newest_first(self, git_repo):
        first = commit_file(git_repo, "a.txt", "1", "chore: one")
        commit_file(git_repo, "a.txt", "2", "feat: two")
        commit_file(git_repo, "a.txt", "3", "fix: three")

        commits = GitRepository(git_repo).commits_between(first, "HEAD")
        assert [c.message for c in commits] == ["fix: three", "feat: two"]

    def test_show_file_missing_returns_none(self, git_repo):
        commit_file(git_repo, "a.txt", "1", "chore: one")
        repo = GitRepository(git_repo)
        assert repo.show_file("HEAD", "a.txt") == "1"
        assert repo.show_file("HEAD", "missing.json") is None

    def test_tags_and_remotes(self, git_repo, bare_remote):
        commit_file(git_repo, "a.txt", "1", "chore: one")
        repo = GitRepository(git_repo)
        repo.create_tag("v1.0.0")

        assert repo.tag_names() == ["v1.0.0"]
        assert repo.tags()[0].hash == git(git_repo, 'rev-parse', 'HEAD').strip()
        assert repo.remotes() == ["origin"]
        assert repo.has_remote()

    def test_push_without_remote_fails(self, git_repo):
        commit_file(git_repo, "a.txt", "1", "chore: one")
        with pytest.raises(GitError, match="No remote"):
            GitRepository(git_repo).push()

    def test_push_with_tags(self, git_repo, bare_remote):
        commit_file(git_repo, "a.txt", "1", "chore: one")
        repo = GitRepository(git_repo)
        repo.create_tag("v0.1.0")
        repo.push(include_tags=True)

        assert "v0.1.0" in git(bare_remote, 'tag', '--list')


# ---------------------------------------------------------------------------
# RefResolver
# ---------------------------------------------------------------------------

class TestRefResolver:

    def test_resolve_known_and_unknown(self, git_repo):
        head = commit_file(git_repo, "a.txt", "1", "chore: one")
        refs = RefResolver(GitRepository(git_repo))

        assert refs.resolve("HEAD") == head
        with pytest.raises(RefResolutionError, match="Unknown reference: nope"):
            refs.resolve("nope")

    def test_resolution_error_is_git_error(self):
        assert issubclass(RefResolutionError, GitError)

    def test_first_commit_and_latest_tag(self, git_repo):
        first = commit_file(git_repo, "a.txt", "1", "chore: one")
        commit_file(git_repo, "a.txt", "2", "feat: two")
        repo = GitRepository(git_repo)
        refs = RefResolver(repo)

        assert refs.first_commit() == first
        assert refs.latest_tag() is None

        repo.create_tag("v1.0.0")
        assert refs.latest_tag().name == "v1.0.0"

    def test_empty_repository(self, git_repo):
        refs = RefResolver(GitRepository(git_repo))
        assert refs.first_commit() is None
        assert refs.latest_tag() is None

    @pytest.mark.parametrize("names, expected", [
        ([], "v"),
        (["v1.0.0"], "v"),
        (["1.0.0"], ""),
        (["v1.0.0", "1.1.0"], "v"),
        (["1.0.0", "1.1.0", "v2.0.0"], ""),
    ])
    def test_majority_prefix(self, names, expected):
        assert majority_prefix(names) == expected


# ---------------------------------------------------------------------------
# Version detection
# ---------------------------------------------------------------------------

class TestVersionHelpers:

    @pytest.mark.parametrize("version, expected", [
        ("1.2.3", True),
        ("v1.2.3", True),
        ("1.2.3-beta.1", True),
        ("1.2.3+build.5", True),
        ("1.2", False),
        ("latest", False),
    ])
    def test_is_valid_version(self, version, expected):
        assert is_valid_version(version) is expected

    def test_strip_prefix(self):
        assert strip_version_prefix("v2.0.0") == "2.0.0"
        assert strip_version_prefix("2.0.0") == "2.0.0"

    def test_change_ignores_prefix(self):
        assert not VersionChange("v1.0.0", "1.0.0").changed
        assert VersionChange("1.0.0", "1.1.0").changed
        assert VersionChange(None, "1.0.0").changed
        assert not VersionChange("1.0.0", None).changed

    def test_parse_json_manifest(self):
        assert parse_manifest_version('{"version": "2.1.0"}', "package.json") == "2.1.0"
        assert parse_manifest_version('{"name": "x"}', "package.json") is None
        assert parse_manifest_version('not json', "package.json") is None
        assert parse_manifest_version('[1, 2]', "package.json") is None

    def test_parse_toml_manifest(self):
        pep621 = '[project]\nname = "x"\nversion = "0.3.0"\n'
        poetry = '[tool.poetry]\nname = "x"\nversion = "0.4.0"\n'
        assert parse_manifest_version(pep621, "pyproject.toml") == "0.3.0"
        assert parse_manifest_version(poetry, "pyproject.toml") == "0.4.0"
        assert parse_manifest_version("[project", "pyproject.toml") is None


class TestVersionDetector:

    def test_detects_bump_between_refs(self, git_repo):
        first = commit_file(git_repo, "package.json", json.dumps({"version": "1.0.0"}), "chore: init")
        commit_file(git_repo, "package.json", json.dumps({"version": "1.1.0"}), "chore: bump")

        change = VersionDetector(GitRepository(git_repo)).detect_change(first, "HEAD")
        assert change.old_version == "1.0.0"
        assert change.new_version == "1.1.0"
        assert change.changed

    def test_missing_manifest_is_not_a_change(self, git_repo):
        first = commit_file(git_repo, "a.txt", "1", "chore: init")
        commit_file(git_repo, "a.txt", "2", "feat: more")

        change = VersionDetector(GitRepository(git_repo)).detect_change(first, "HEAD")
        assert change == VersionChange(None, None)
        assert not change.changed

    def test_malformed_manifest_is_not_a_change(self, git_repo):
        first = commit_file(git_repo, "package.json", '{"version": "1.0.0"}', "chore: init")
        commit_file(git_repo, "package.json", '{broken', "chore: break")

        change = VersionDetector(GitRepository(git_repo)).detect_change(first, "HEAD")
        assert change.new_version is None
        assert not change.changed
