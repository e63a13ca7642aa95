"""Confirmation gates as pure functions.

Each gate maps flags and observed state to a Decision without touching the
terminal; `confirmed` is the only place a question is actually asked.
"""

from enum import Enum
from typing import Callable

from quill.git.repository import RepositoryStatus


class Decision(Enum):
    PROCEED = "proceed"
    SKIP = "skip"
    ASK = "ask"


def gate(auto: bool, applicable: bool = True) -> Decision:
    if not applicable:
        return Decision.SKIP
    return Decision.PROCEED if auto else Decision.ASK


def stage_decision(status: RepositoryStatus, auto: bool) -> Decision:
    """Whether to stage everything. Only applicable when something is unstaged."""
    return gate(auto, applicable=status.has_unstaged)


def commit_decision(auto: bool) -> Decision:
    return gate(auto)


def tag_decision(auto_tag: bool) -> Decision:
    return gate(auto_tag)


def push_decision(auto_push: bool, has_remote: bool) -> Decision:
    return gate(auto_push, applicable=has_remote)


def confirmed(decision: Decision, ask: Callable[[], bool]) -> bool:
    """Resolve a decision to yes/no, calling ask only for Decision.ASK."""
    if decision is Decision.ASK:
        return ask()
    return decision is Decision.PROCEED
