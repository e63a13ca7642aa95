"""Version detection from manifest files across two references."""

import json
import re
import tomllib
from dataclasses import dataclass
from pathlib import PurePosixPath

from quill.git.repository import GitRepository

DEFAULT_MANIFEST = "package.json"

SEMVER_PATTERN = re.compile(r'^\d+\.\d+\.\d+(-[\w.]+)?(\+[\w.]+)?$')


def strip_version_prefix(version: str) -> str:
    return version[1:] if version.startswith("v") else version


def is_valid_version(version: str) -> bool:
    """Shape check only; used for a soft warning."""
    return bool(SEMVER_PATTERN.match(strip_version_prefix(version)))


@dataclass(frozen=True)
class VersionChange:
    """Manifest version at two points in history. Values keep their raw form."""
    old_version: str | None = None
    new_version: str | None = None

    @property
    def changed(self) -> bool:
        # A manifest that disappears is never a bump
        if self.new_version is None:
            return False
        if self.old_version is None:
            return True
        return strip_version_prefix(self.old_version) != strip_version_prefix(self.new_version)


def _version_from_json(content: str) -> str | None:
    data = json.loads(content)
    return data.get("version") if isinstance(data, dict) else None


def _version_from_toml(content: str) -> str | None:
    data = tomllib.loads(content)
    version = data.get("project", {}).get("version")
    if version is None:
        version = data.get("tool", {}).get("poetry", {}).get("version")
    return version


def parse_manifest_version(content: str, manifest_path: str) -> str | None:
    """Extract the version field, or None when it can't be read."""
    suffix = PurePosixPath(manifest_path).suffix.lower()
    parser = _version_from_toml if suffix == ".toml" else _version_from_json
    try:
        version = parser(content)
    except (ValueError, AttributeError, TypeError):
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors
        return None
    if not isinstance(version, str) or not version.strip():
        return None
    return version.strip()


class VersionDetector:
    """Best-effort version bump detection. Never raises for missing or bad manifests."""

    def __init__(self, repo: GitRepository):
        self.repo = repo

    def read_version(self, ref: str, manifest_path: str = DEFAULT_MANIFEST) -> str | None:
        content = self.repo.show_file(ref, manifest_path)
        if content is None:
            return None
        return parse_manifest_version(content, manifest_path)

    def detect_change(self, from_ref: str, to_ref: str, manifest_path: str = DEFAULT_MANIFEST) -> VersionChange:
        return VersionChange(
            old_version=self.read_version(from_ref, manifest_path),
            new_version=self.read_version(to_ref, manifest_path),
        )
