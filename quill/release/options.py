"""Options for the commit, changelog and release workflows."""

from dataclasses import dataclass


@dataclass
class CommitOptions:
    message: str | None = None
    all: bool = False
    yes: bool = False


@dataclass
class ChangelogOptions:
    from_ref: str | None = None
    to_ref: str = "HEAD"


@dataclass
class ReleaseOptions:
    from_ref: str | None = None
    version: str | None = None
    tag: bool = False
    push: bool = False
    yes: bool = False

    # yes implies every per-step flag
    @property
    def auto_tag(self) -> bool:
        return self.tag or self.yes

    @property
    def auto_push(self) -> bool:
        return self.push or self.yes
