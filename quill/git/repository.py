"""Git Repository - Thin wrapper around the git executable."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from quill.errors import QuillError

# Field/record separators for `git log --format`
_FIELD_SEP = '\x1f'
_RECORD_SEP = '\x1e'
_LOG_FORMAT = f'%H{_FIELD_SEP}%an{_FIELD_SEP}%aI{_FIELD_SEP}%s{_RECORD_SEP}'


@dataclass(frozen=True)
class RepositoryStatus:
    """Snapshot of the working tree. Recomputed on every query."""
    staged: tuple[str, ...] = ()
    unstaged: tuple[str, ...] = ()
    untracked: tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked)

    @property
    def has_staged(self) -> bool:
        return len(self.staged) > 0

    @property
    def has_unstaged(self) -> bool:
        """Unstaged modifications or untracked files."""
        return len(self.unstaged) > 0 or len(self.untracked) > 0


@dataclass(frozen=True)
class CommitRecord:
    """A single commit read from history."""
    hash: str
    message: str
    author: str = ""
    date: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


@dataclass(frozen=True)
class TagRecord:
    """A tag and the commit it points at. hash is empty if it could not be resolved."""
    name: str
    hash: str = ""


class GitError(QuillError):
    """Raised when git operations fail."""
    pass


def parse_porcelain_status(output: str) -> RepositoryStatus:
    """Parse `git status --porcelain -z` output into a RepositoryStatus."""
    staged, unstaged, untracked = [], [], []
    entries = output.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        x, y, path = entry[0], entry[1], entry[3:]
        if x == '?' and y == '?':
            untracked.append(path)
            continue
        if x not in (' ', '!'):
            staged.append(path)
        if y not in (' ', '!'):
            unstaged.append(path)
        # Renames and copies carry the original path as an extra entry
        if x in ('R', 'C') or y in ('R', 'C'):
            i += 1
    return RepositoryStatus(staged=tuple(staged), unstaged=tuple(unstaged), untracked=tuple(untracked))


def parse_log(output: str) -> list[CommitRecord]:
    """Parse log output produced with _LOG_FORMAT."""
    commits = []
    for record in output.split(_RECORD_SEP):
        record = record.strip('\n')
        if not record:
            continue
        parts = record.split(_FIELD_SEP)
        if len(parts) < 4:
            continue
        commits.append(CommitRecord(hash=parts[0], author=parts[1], date=parts[2], message=parts[3]))
    return commits


class GitRepository:
    """Runs git commands against one working directory."""

    def __init__(self, working_dir: Path | None = None):
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _try_git(self, *args: str) -> str | None:
        """Run a git command, returning None instead of raising on failure."""
        try:
            return self._run_git(*args)
        except GitError:
            return None

    # -- repository ---------------------------------------------------------

    def is_repo(self) -> bool:
        return self._try_git('rev-parse', '--git-dir') is not None

    def ensure_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        if not self.is_repo():
            raise GitError("Not a git repository.\nPlease run this command from within a git repository.")

    def root(self) -> Path:
        output = self._try_git('rev-parse', '--show-toplevel')
        return Path(output.strip()) if output else self.working_dir

    # -- working tree -------------------------------------------------------

    def status(self) -> RepositoryStatus:
        return parse_porcelain_status(self._run_git('status', '--porcelain', '-z'))

    def staged_diff(self) -> str:
        return self._run_git('diff', '--cached')

    def stage_all(self) -> None:
        self._run_git('add', '-A')

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)

    # -- history ------------------------------------------------------------

    def recent_commits(self, count: int = 20) -> list[CommitRecord]:
        output = self._try_git('log', '-n', str(count), f'--format={_LOG_FORMAT}')
        return parse_log(output) if output else []

    def commits_between(self, from_ref: str, to_ref: str) -> list[CommitRecord]:
        return parse_log(self._run_git('log', f'{from_ref}..{to_ref}', f'--format={_LOG_FORMAT}'))

    def root_commits(self) -> list[str]:
        output = self._try_git('rev-list', '--max-parents=0', 'HEAD')
        if not output:
            return []
        return [line for line in output.strip().split('\n') if line]

    def rev_parse(self, ref: str) -> str:
        return self._run_git('rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}').strip()

    def show_file(self, ref: str, path: str) -> str | None:
        """Content of path at ref, or None if it does not exist there."""
        return self._try_git('show', f'{ref}:{path}')

    # -- tags and remotes ---------------------------------------------------

    def tag_names(self) -> list[str]:
        """Tag names, newest first."""
        output = self._run_git('tag', '--list', '--sort=-creatordate')
        return [line.strip() for line in output.split('\n') if line.strip()]

    def tags(self) -> list[TagRecord]:
        records = []
        for name in self.tag_names():
            try:
                records.append(TagRecord(name=name, hash=self.rev_parse(name)))
            except GitError:
                records.append(TagRecord(name=name, hash=""))
        return records

    def create_tag(self, name: str) -> None:
        self._run_git('tag', name)

    def remotes(self) -> list[str]:
        output = self._try_git('remote')
        if not output:
            return []
        return [line.strip() for line in output.split('\n') if line.strip()]

    def has_remote(self) -> bool:
        return len(self.remotes()) > 0

    def push(self, include_tags: bool = False) -> None:
        remotes = self.remotes()
        if not remotes:
            raise GitError("No remote configured")
        remote = 'origin' if 'origin' in remotes else remotes[0]
        args = ['push', remote, 'HEAD']
        if include_tags:
            args.append('--tags')
        self._run_git(*args)
