"""Release Workflow Package"""

from quill.release.options import CommitOptions, ChangelogOptions, ReleaseOptions
from quill.release.decisions import Decision, gate, stage_decision, commit_decision, tag_decision, push_decision, confirmed
from quill.release.orchestrator import ReleaseOrchestrator, ReleaseResult, ReleaseState, StepOutcome

__all__ = [
    "CommitOptions",
    "ChangelogOptions",
    "ReleaseOptions",
    "Decision",
    "gate",
    "stage_decision",
    "commit_decision",
    "tag_decision",
    "push_decision",
    "confirmed",
    "ReleaseOrchestrator",
    "ReleaseResult",
    "ReleaseState",
    "StepOutcome",
]
