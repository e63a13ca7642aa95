"""CLI Commands"""

import os

from quill.changelog import MergeChoice
from quill.cli.interactive import Choice
from quill.cli.review import (
    CHANGELOG_MENU,
    COMMIT_MENU,
    ChangelogAction,
    ChangelogState,
    CommitAction,
    CommitState,
    changelog_review,
    commit_review,
)
from quill.cli.utils import copy_to_clipboard
from quill.config import ConfigManager, ModelSpec, MODEL_ENV_VARS
from quill.context import QuillContext
from quill.generation import generate_changelog, generate_commit_message
from quill.output import (
    Spinner,
    bold,
    dim,
    display_block,
    info,
    intro,
    outro,
    print_info,
    print_success,
    print_warning,
)
from quill.release import (
    ChangelogOptions,
    CommitOptions,
    ReleaseOptions,
    ReleaseOrchestrator,
    confirmed,
    stage_decision,
)

MAX_PICKER_TAGS = 10
MAX_PICKER_COMMITS = 10
MAX_LISTED_MODELS = 10


# ---------------------------------------------------------------------------
# commit
# ---------------------------------------------------------------------------

def _first_line(message: str) -> str:
    return message.split('\n')[0]


def _review_commit(ctx: QuillContext, message: str) -> CommitState:
    """Run the commit/edit/regenerate/cancel menu until a terminal state."""
    repo, prompter = ctx.repo, ctx.prompter
    machine = commit_review()

    while not machine.done:
        choices = [Choice(action.value, COMMIT_MENU[action]) for action in machine.available()]
        state = machine.fire(CommitAction(prompter.select("What would you like to do?", choices)))

        if state is CommitState.COMMITTED:
            repo.commit(message)
            print_success(f"Committed: {_first_line(message)}")
        elif state is CommitState.EDITING:
            message = prompter.edit(message)
            display_block(message, highlight_commit=True)
            machine.fire(CommitAction.RESUME)
        elif state is CommitState.REGENERATING:
            message = generate_commit_message(ctx, repo.staged_diff(), regenerate=True)
            display_block(message, highlight_commit=True)
            machine.fire(CommitAction.RESUME)
        elif state is CommitState.CANCELLED:
            print_warning("Commit cancelled.")

    return machine.state


def commit_command(ctx: QuillContext, options: CommitOptions) -> int:
    """Stage if needed, generate (or take) a message, and commit."""
    intro()
    repo = ctx.repo
    repo.ensure_repo()

    status = repo.status()
    if options.all:
        repo.stage_all()
        status = repo.status()

    if not status.has_staged:
        if not status.has_unstaged:
            print_info("Nothing to commit, working tree clean.")
            return 0

        decision = stage_decision(status, options.yes)
        if not confirmed(decision, lambda: ctx.prompter.confirm("No staged changes. Stage all changes?")):
            print_warning("Nothing to commit.")
            return 0
        repo.stage_all()
        status = repo.status()

    print_info(f"Staged files: {len(status.staged)}")

    if options.message:
        message = options.message
    else:
        diff = repo.staged_diff()
        if not diff.strip():
            print_warning("No diff content found for staged files.")
            return 0
        message = generate_commit_message(ctx, diff)

    display_block(message, highlight_commit=True)

    if options.yes:
        repo.commit(message)
        print_success(f"Committed: {_first_line(message)}")
    else:
        _review_commit(ctx, message)

    outro("Done!")
    return 0


# ---------------------------------------------------------------------------
# changelog
# ---------------------------------------------------------------------------

def select_from_ref(ctx: QuillContext) -> str | None:
    """Ask where the changelog should start: last changelog, a tag or a recent commit."""
    choices = []

    last_ref = ctx.history.last_reference()
    if last_ref:
        choices.append(Choice(last_ref, "Since last changelog", last_ref[:7]))

    for tag in ctx.repo.tags()[:MAX_PICKER_TAGS]:
        choices.append(Choice(tag.name, f"Tag: {tag.name}"))

    for commit in ctx.repo.recent_commits(20)[:MAX_PICKER_COMMITS]:
        choices.append(Choice(commit.hash, f"{commit.short_hash}: {commit.message[:50]}"))

    if not choices:
        return ctx.refs.first_commit()

    return ctx.prompter.select("Select starting reference:", choices)


def _ask_merge_choice(ctx: QuillContext) -> MergeChoice:
    name = ctx.changelog.name
    if ctx.prompter.confirm(f"{name} exists. Merge new content?"):
        return MergeChoice.MERGE
    if ctx.prompter.confirm("Overwrite existing file?", default=False):
        return MergeChoice.OVERWRITE
    return MergeChoice.ABANDON


def _save_changelog(ctx: QuillContext, entry: str, from_ref: str, to_ref: str,
                    to_hash: str, count: int) -> bool:
    outcome = ctx.merge_policy.reconcile(ctx.changelog, entry, lambda: _ask_merge_choice(ctx))
    if not outcome.written:
        print_warning("Changelog not saved.")
        return False

    ctx.history.record(from_ref, to_ref, to_hash, count)
    print_success(f"Saved to {ctx.changelog.name} ({outcome.value})")
    return True


def _review_changelog(ctx: QuillContext, entry: str, from_ref: str, to_ref: str,
                      to_hash: str, count: int) -> ChangelogState:
    """Run the save/copy/done menu until a terminal state."""
    machine = changelog_review()

    while not machine.done:
        choices = [Choice(action.value, CHANGELOG_MENU[action]) for action in machine.available()]
        state = machine.fire(ChangelogAction(ctx.prompter.select("What would you like to do?", choices)))

        if state is ChangelogState.SAVED:
            _save_changelog(ctx, entry, from_ref, to_ref, to_hash, count)
        elif state is ChangelogState.COPYING:
            copied, reason = copy_to_clipboard(entry)
            if copied:
                print_success("Copied to clipboard!")
            else:
                print_warning(f"Failed to copy to clipboard{': ' + reason if reason else ''}")
            machine.fire(ChangelogAction.RESUME)

    return machine.state


def changelog_command(ctx: QuillContext, options: ChangelogOptions) -> int:
    """Generate a changelog entry for a commit range and offer to save it."""
    intro()
    repo = ctx.repo
    repo.ensure_repo()

    to_ref = options.to_ref or "HEAD"
    from_ref = options.from_ref
    if from_ref:
        ctx.refs.resolve(from_ref)
    else:
        from_ref = select_from_ref(ctx)
        if not from_ref:
            print_warning("No starting reference selected.")
            return 0

    to_hash = ctx.refs.resolve(to_ref)
    print_info(f"Generating changelog from {from_ref} to {to_ref}")

    commits = repo.commits_between(from_ref, to_ref)
    if not commits:
        print_warning("No commits found in the specified range.")
        return 0

    print_info(f"Found {len(commits)} commits")

    change = ctx.versions.detect_change(from_ref, to_ref, ctx.config.manifest)
    version = change.new_version if change.changed else None

    entry = generate_changelog(ctx, commits, version, from_ref, to_ref)
    display_block(entry)

    _review_changelog(ctx, entry, from_ref, to_ref, to_hash, len(commits))
    outro("Done!")
    return 0


# ---------------------------------------------------------------------------
# release
# ---------------------------------------------------------------------------

def release_command(ctx: QuillContext, options: ReleaseOptions) -> int:
    intro()
    result = ReleaseOrchestrator(ctx).run(options)
    outro(f"Released {result.version}!")
    return 0


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

def display_config(settings: ConfigManager) -> int:
    """Display current configuration."""
    config = settings.load()

    print(f"\n{bold('Current configuration')}\n")
    print(f"  {dim('Loaded from:')} {settings.config_path}")
    print(f"  Commit model:    {info(str(config.commit_model))}")
    print(f"  Changelog model: {info(str(config.changelog_model))}")
    print(f"  Manifest:        {info(config.manifest)}")

    overrides = {var: os.environ[var] for var in MODEL_ENV_VARS.values() if os.environ.get(var)}
    if overrides:
        print(f"\n  {dim('Environment overrides:')}")
        for var, value in overrides.items():
            print(f"    {var}={value}")

    print()
    print(dim("Use --commit-model or --changelog-model to change settings."))
    print(dim("Use --list-models to see available providers and models."))
    return 0


def update_models(settings: ConfigManager, commit_model: str | None, changelog_model: str | None) -> int:
    # Parse both before loading so a bad value leaves the file untouched
    commit_spec = ModelSpec.parse(commit_model).require_known_provider() if commit_model else None
    changelog_spec = ModelSpec.parse(changelog_model).require_known_provider() if changelog_model else None

    config = settings.load()
    if commit_spec:
        config.commit_model = commit_spec
    if changelog_spec:
        config.changelog_model = changelog_spec

    path = settings.save(config)
    if commit_model:
        print_success(f"Commit model set to: {config.commit_model}")
    if changelog_model:
        print_success(f"Changelog model set to: {config.changelog_model}")
    print_info(f"Configuration saved to {path}")
    return 0


def list_models(ctx: QuillContext) -> int:
    with Spinner("Fetching available providers...", "Fetched providers"):
        providers = ctx.backend.list_models()

    if not providers:
        print_warning("No providers available. Start Ollama or set ANTHROPIC_API_KEY.")
        return 0

    print_info("Available providers and models:")
    for provider, models in providers.items():
        print(f"\n  {bold(provider)}:")
        if not models:
            print(dim("    No models available"))
            continue
        for model in models[:MAX_LISTED_MODELS]:
            print(f"    - {provider}/{model}")
        if len(models) > MAX_LISTED_MODELS:
            print(dim(f"    ... and {len(models) - MAX_LISTED_MODELS} more"))
    return 0


def config_command(ctx: QuillContext, commit_model: str | None = None, changelog_model: str | None = None,
                   show_models: bool = False) -> int:
    intro()
    if show_models:
        code = list_models(ctx)
    elif commit_model or changelog_model:
        code = update_models(ctx.settings, commit_model, changelog_model)
    else:
        code = display_config(ctx.settings)
    outro("Done!")
    return code
