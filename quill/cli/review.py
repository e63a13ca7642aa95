"""Review menus as explicit state machines.

Each machine has named states, a transition table keyed by (state, action),
and a set of terminal states. The command drives the machine and performs the
side effect for whichever state it lands in.
"""

from dataclasses import dataclass, field
from enum import Enum


class CommitState(Enum):
    REVIEWING = "reviewing"
    EDITING = "editing"
    REGENERATING = "regenerating"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class CommitAction(Enum):
    COMMIT = "commit"
    EDIT = "edit"
    REGENERATE = "regenerate"
    CANCEL = "cancel"
    RESUME = "resume"


class ChangelogState(Enum):
    REVIEWING = "reviewing"
    COPYING = "copying"
    SAVED = "saved"
    DONE = "done"


class ChangelogAction(Enum):
    SAVE = "save"
    COPY = "copy"
    DONE = "done"
    RESUME = "resume"


COMMIT_TRANSITIONS = {
    (CommitState.REVIEWING, CommitAction.COMMIT): CommitState.COMMITTED,
    (CommitState.REVIEWING, CommitAction.EDIT): CommitState.EDITING,
    (CommitState.REVIEWING, CommitAction.REGENERATE): CommitState.REGENERATING,
    (CommitState.REVIEWING, CommitAction.CANCEL): CommitState.CANCELLED,
    (CommitState.EDITING, CommitAction.RESUME): CommitState.REVIEWING,
    (CommitState.REGENERATING, CommitAction.RESUME): CommitState.REVIEWING,
}

CHANGELOG_TRANSITIONS = {
    (ChangelogState.REVIEWING, ChangelogAction.SAVE): ChangelogState.SAVED,
    (ChangelogState.REVIEWING, ChangelogAction.COPY): ChangelogState.COPYING,
    (ChangelogState.REVIEWING, ChangelogAction.DONE): ChangelogState.DONE,
    (ChangelogState.COPYING, ChangelogAction.RESUME): ChangelogState.REVIEWING,
}

# Menu labels, in display order, for actions offered while reviewing
COMMIT_MENU = {
    CommitAction.COMMIT: "Commit with this message",
    CommitAction.EDIT: "Edit message",
    CommitAction.REGENERATE: "Regenerate message",
    CommitAction.CANCEL: "Cancel",
}

CHANGELOG_MENU = {
    ChangelogAction.SAVE: "Save to CHANGELOG.md",
    ChangelogAction.COPY: "Copy to clipboard",
    ChangelogAction.DONE: "Done",
}


@dataclass
class ReviewMachine:
    transitions: dict
    terminal: frozenset
    state: Enum
    trail: list = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.state in self.terminal

    def available(self) -> list[Enum]:
        return [action for (state, action) in self.transitions if state == self.state]

    def fire(self, action: Enum) -> Enum:
        key = (self.state, action)
        if key not in self.transitions:
            raise ValueError(f"Action '{action.value}' is not allowed while {self.state.value}")
        self.trail.append(key)
        self.state = self.transitions[key]
        return self.state


def commit_review() -> ReviewMachine:
    return ReviewMachine(
        transitions=COMMIT_TRANSITIONS,
        terminal=frozenset({CommitState.COMMITTED, CommitState.CANCELLED}),
        state=CommitState.REVIEWING,
    )


def changelog_review() -> ReviewMachine:
    return ReviewMachine(
        transitions=CHANGELOG_TRANSITIONS,
        terminal=frozenset({ChangelogState.SAVED, ChangelogState.DONE}),
        state=ChangelogState.REVIEWING,
    )
