"""Reference resolution and tag naming conventions."""

from quill.git.repository import GitError, GitRepository, TagRecord

DEFAULT_TAG_PREFIX = "v"


class RefResolutionError(GitError):
    """Raised when a reference does not exist in the repository."""
    pass


def majority_prefix(tag_names: list[str]) -> str:
    """Return "v" unless most tags are unprefixed. Ties and no tags favor "v"."""
    with_v = sum(1 for name in tag_names if name.startswith("v"))
    without_v = len(tag_names) - with_v
    return DEFAULT_TAG_PREFIX if with_v >= without_v else ""


class RefResolver:
    """Resolves symbolic references to commit ids."""

    def __init__(self, repo: GitRepository):
        self.repo = repo

    def resolve(self, ref: str) -> str:
        try:
            commit = self.repo.rev_parse(ref)
        except GitError:
            raise RefResolutionError(f"Unknown reference: {ref}")
        if not commit:
            raise RefResolutionError(f"Unknown reference: {ref}")
        return commit

    def detect_tag_prefix(self) -> str:
        return majority_prefix(self.repo.tag_names())

    def latest_tag(self) -> TagRecord | None:
        tags = self.repo.tags()
        return tags[0] if tags else None

    def first_commit(self) -> str | None:
        roots = self.repo.root_commits()
        return roots[0] if roots else None
