"""Release Orchestrator - commit, changelog, tag and push as one workflow.

The four steps run strictly in order; each one looks at the repository as the
previous step left it. A step may run or be skipped. Only a missing starting
reference in the changelog step aborts the release. Nothing is rolled back:
commits and changelog writes from earlier steps stay in place if a later step
fails.
"""

from dataclasses import dataclass, field
from enum import Enum

from quill.changelog import MergeChoice
from quill.context import QuillContext
from quill.errors import OperationCancelled, QuillError
from quill.generation import generate_changelog, generate_commit_message
from quill.git import is_valid_version, strip_version_prefix
from quill.output import Spinner, display_block, print_info, print_step, print_success, print_warning
from quill.release.decisions import (
    Decision,
    commit_decision,
    confirmed,
    push_decision,
    stage_decision,
    tag_decision,
)
from quill.release.options import ReleaseOptions

RELEASE_TARGET = "HEAD"


class ReleaseState(Enum):
    IDLE = "idle"
    COMMITTING = "committing"
    CHANGELOG_GENERATING = "changelog_generating"
    TAGGING = "tagging"
    PUSHING = "pushing"
    DONE = "done"


class StepOutcome(Enum):
    RAN = "ran"
    SKIPPED = "skipped"


@dataclass
class ReleaseResult:
    from_ref: str | None = None
    version: str | None = None
    tag_name: str | None = None
    steps: dict[ReleaseState, StepOutcome] = field(default_factory=dict)

    def ran(self, state: ReleaseState) -> bool:
        return self.steps.get(state) is StepOutcome.RAN


def release_commit_message(version: str) -> str:
    return f"chore(release): v{strip_version_prefix(version)}"


class ReleaseOrchestrator:

    STEPS = [
        (ReleaseState.COMMITTING, "Step 1: Commit pending changes", "commit_step"),
        (ReleaseState.CHANGELOG_GENERATING, "Step 2: Generate changelog", "changelog_step"),
        (ReleaseState.TAGGING, "Step 3: Create release tag", "tag_step"),
        (ReleaseState.PUSHING, "Step 4: Push to remote", "push_step"),
    ]

    def __init__(self, ctx: QuillContext):
        self.ctx = ctx
        self.state = ReleaseState.IDLE

    def run(self, options: ReleaseOptions) -> ReleaseResult:
        self.ctx.repo.ensure_repo()
        result = ReleaseResult()
        for state, title, step in self.STEPS:
            self.state = state
            print_step(title)
            result.steps[state] = getattr(self, step)(options, result)
        self.state = ReleaseState.DONE
        return result

    # -- step 1 -------------------------------------------------------------

    def commit_step(self, options: ReleaseOptions, result: ReleaseResult) -> StepOutcome:
        repo, prompter = self.ctx.repo, self.ctx.prompter
        status = repo.status()

        if status.is_clean:
            print_info("Working tree clean, skipping commit step.")
            return StepOutcome.SKIPPED

        question = "Stage remaining unstaged changes?" if status.has_staged else "Stage all changes?"
        decision = stage_decision(status, options.yes)
        if decision is not Decision.SKIP:
            if confirmed(decision, lambda: prompter.confirm(question)):
                repo.stage_all()
                status = repo.status()
            elif not status.has_staged:
                print_warning("Skipping commit (no staged changes).")
                return StepOutcome.SKIPPED

        if not status.has_staged:
            print_info("Nothing to commit.")
            return StepOutcome.SKIPPED

        message = generate_commit_message(self.ctx, repo.staged_diff())
        display_block(message, highlight_commit=True)

        if confirmed(commit_decision(options.yes), lambda: prompter.confirm("Commit with this message?")):
            repo.commit(message)
            print_success("Changes committed.")
            return StepOutcome.RAN

        print_warning("Commit skipped.")
        return StepOutcome.SKIPPED

    # -- step 2 -------------------------------------------------------------

    def resolve_start(self, options: ReleaseOptions) -> str:
        """Explicit option, then latest tag, then first commit."""
        refs = self.ctx.refs
        if options.from_ref:
            refs.resolve(options.from_ref)
            return options.from_ref

        latest = refs.latest_tag()
        if latest:
            print_info(f"Using latest tag as starting point: {latest.name}")
            return latest.name

        first = refs.first_commit()
        if first:
            print_info("No tags found, using first commit.")
            return first

        raise QuillError("Could not determine starting reference.")

    def resolve_version(self, options: ReleaseOptions, from_ref: str) -> str:
        """Explicit option, then a manifest bump since from_ref, then ask."""
        if options.version:
            return options.version

        manifest = self.ctx.config.manifest
        change = self.ctx.versions.detect_change(from_ref, RELEASE_TARGET, manifest)
        if change.changed:
            print_info(f"Detected version from {manifest}: {change.new_version}")
            return change.new_version

        prompter = self.ctx.prompter
        version = prompter.text("Enter version for this release:", placeholder="1.0.0")
        if not is_valid_version(version):
            print_warning(f'"{version}" doesn\'t look like a valid semver version.')
            if not prompter.confirm("Continue anyway?", default=False):
                raise OperationCancelled("Release cancelled.")
        return version

    def changelog_step(self, options: ReleaseOptions, result: ReleaseResult) -> StepOutcome:
        ctx = self.ctx
        result.from_ref = self.resolve_start(options)
        result.version = self.resolve_version(options, result.from_ref)
        print_info(f"Generating changelog for version {result.version}")

        to_hash = ctx.refs.resolve(RELEASE_TARGET)
        commits = ctx.repo.commits_between(result.from_ref, RELEASE_TARGET)
        if not commits:
            print_warning(f"No commits found since {result.from_ref}; changelog not updated.")
            return StepOutcome.SKIPPED

        entry = generate_changelog(ctx, commits, result.version, result.from_ref, RELEASE_TARGET)
        outcome = ctx.merge_policy.reconcile(ctx.changelog, entry, lambda: MergeChoice.MERGE)
        print_success(f"Changelog saved to {ctx.changelog.name} ({outcome.value})")
        ctx.history.record(result.from_ref, RELEASE_TARGET, to_hash, len(commits))

        message = release_commit_message(result.version)
        ctx.repo.stage_all()
        ctx.repo.commit(message)
        print_success(f"Committed changelog: {message}")
        return StepOutcome.RAN

    # -- step 3 -------------------------------------------------------------

    def tag_step(self, options: ReleaseOptions, result: ReleaseResult) -> StepOutcome:
        prefix = self.ctx.refs.detect_tag_prefix()
        result.tag_name = prefix + strip_version_prefix(result.version)

        question = f'Create tag "{result.tag_name}"?'
        if confirmed(tag_decision(options.auto_tag), lambda: self.ctx.prompter.confirm(question)):
            self.ctx.repo.create_tag(result.tag_name)
            print_success(f"Created tag: {result.tag_name}")
            return StepOutcome.RAN

        print_warning("Tag creation skipped.")
        return StepOutcome.SKIPPED

    # -- step 4 -------------------------------------------------------------

    def push_step(self, options: ReleaseOptions, result: ReleaseResult) -> StepOutcome:
        repo = self.ctx.repo
        decision = push_decision(options.auto_push, repo.has_remote())
        if decision is Decision.SKIP:
            print_warning("No remote configured. Skipping push.")
            return StepOutcome.SKIPPED

        if confirmed(decision, lambda: self.ctx.prompter.confirm("Push to remote (with tags)?")):
            with Spinner("Pushing to remote..."):
                repo.push(include_tags=True)
            print_success("Pushed commits and tags to remote.")
            return StepOutcome.RAN

        print_warning("Push skipped.")
        return StepOutcome.SKIPPED
