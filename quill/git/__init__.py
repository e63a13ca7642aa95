"""Git Operations Package"""

from quill.git.repository import GitRepository, GitError, RepositoryStatus, CommitRecord, TagRecord
from quill.git.refs import RefResolver, RefResolutionError
from quill.git.version import VersionDetector, VersionChange, strip_version_prefix, is_valid_version

__all__ = [
    "GitRepository",
    "GitError",
    "RepositoryStatus",
    "CommitRecord",
    "TagRecord",
    "RefResolver",
    "RefResolutionError",
    "VersionDetector",
    "VersionChange",
    "strip_version_prefix",
    "is_valid_version",
]
