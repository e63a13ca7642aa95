"""
Tests for confirmation gates and the review menu state machines.

Run with:
    pytest tests/test_decisions.py -v
"""

import pytest

from quill.cli.review import (
    COMMIT_MENU,
    ChangelogAction,
    ChangelogState,
    CommitAction,
    CommitState,
    changelog_review,
    commit_review,
)
from quill.git import RepositoryStatus
from quill.release import (
    Decision,
    ReleaseOptions,
    commit_decision,
    confirmed,
    gate,
    push_decision,
    stage_decision,
    tag_decision,
)


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------

class TestGates:

    @pytest.mark.parametrize("auto, applicable, expected", [
        (True, True, Decision.PROCEED),
        (False, True, Decision.ASK),
        (True, False, Decision.SKIP),
        (False, False, Decision.SKIP),
    ])
    def test_gate(self, auto, applicable, expected):
        assert gate(auto, applicable) is expected

    def test_stage_only_when_something_unstaged(self):
        staged_only = RepositoryStatus(staged=("a.py",))
        dirty = RepositoryStatus(unstaged=("a.py",))
        untracked = RepositoryStatus(untracked=("b.py",))

        assert stage_decision(staged_only, auto=True) is Decision.SKIP
        assert stage_decision(dirty, auto=False) is Decision.ASK
        assert stage_decision(untracked, auto=True) is Decision.PROCEED

    def test_push_needs_remote(self):
        assert push_decision(auto_push=True, has_remote=False) is Decision.SKIP
        assert push_decision(auto_push=False, has_remote=True) is Decision.ASK

    def test_commit_and_tag(self):
        assert commit_decision(True) is Decision.PROCEED
        assert tag_decision(False) is Decision.ASK

    def test_yes_implies_tag_and_push(self):
        options = ReleaseOptions(yes=True)
        assert options.auto_tag and options.auto_push
        assert ReleaseOptions(tag=True).auto_tag
        assert not ReleaseOptions(tag=True).auto_push


class TestConfirmed:

    def test_only_ask_calls_question(self):
        calls = []

        def ask():
            calls.append(1)
            return False

        assert confirmed(Decision.PROCEED, ask) is True
        assert confirmed(Decision.SKIP, ask) is False
        assert calls == []
        assert confirmed(Decision.ASK, ask) is False
        assert calls == [1]


# ---------------------------------------------------------------------------
# Review machines
# ---------------------------------------------------------------------------

class TestCommitReview:

    def test_menu_order_while_reviewing(self):
        machine = commit_review()
        assert machine.available() == list(COMMIT_MENU)

    def test_edit_then_commit(self):
        machine = commit_review()
        assert machine.fire(CommitAction.EDIT) is CommitState.EDITING
        assert machine.available() == [CommitAction.RESUME]
        machine.fire(CommitAction.RESUME)
        assert machine.fire(CommitAction.COMMIT) is CommitState.COMMITTED
        assert machine.done
        assert len(machine.trail) == 3

    def test_cancel_is_terminal(self):
        machine = commit_review()
        machine.fire(CommitAction.CANCEL)
        assert machine.done
        assert machine.available() == []

    def test_invalid_action_rejected(self):
        machine = commit_review()
        with pytest.raises(ValueError, match="not allowed while reviewing"):
            machine.fire(CommitAction.RESUME)


class TestChangelogReview:

    def test_copy_returns_to_review(self):
        machine = changelog_review()
        machine.fire(ChangelogAction.COPY)
        assert not machine.done
        assert machine.fire(ChangelogAction.RESUME) is ChangelogState.REVIEWING

    @pytest.mark.parametrize("action, state", [
        (ChangelogAction.SAVE, ChangelogState.SAVED),
        (ChangelogAction.DONE, ChangelogState.DONE),
    ])
    def test_terminal_actions(self, action, state):
        machine = changelog_review()
        assert machine.fire(action) is state
        assert machine.done
