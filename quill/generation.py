"""Commit message and changelog generation on top of the backend."""

from quill.context import QuillContext
from quill.git import CommitRecord
from quill.llm import LLMError, validate_commit_message
from quill.output import Spinner
from quill.prompts import ChangelogRequest, clean_commit_message, clean_response


def generate_commit_message(ctx: QuillContext, diff: str, regenerate: bool = False) -> str:
    prompt = ctx.builder.build_commit(ctx.settings.commit_prompt(), diff)
    verb = "Regenerat" if regenerate else "Generat"
    try:
        with Spinner(f"{verb}ing commit message...", f"{verb}ed commit message"):
            content = ctx.backend.generate(prompt, ctx.config.commit_model, validate=validate_commit_message)
    except LLMError as e:
        raise LLMError(
            f"AI generation failed: {e}\n\n"
            "Try again or provide a manual commit message:\n"
            '  quill commit "your message here"'
        )
    return clean_commit_message(clean_response(content))


def generate_changelog(ctx: QuillContext, commits: list[CommitRecord], version: str | None,
                       from_ref: str, to_ref: str) -> str:
    request = ChangelogRequest(commits=commits, from_ref=from_ref, to_ref=to_ref, version=version)
    prompt = ctx.builder.build_changelog(ctx.settings.changelog_prompt(), request)
    try:
        with Spinner("Generating changelog...", "Generated changelog"):
            content = ctx.backend.generate(prompt, ctx.config.changelog_model)
    except LLMError as e:
        raise LLMError(f"AI changelog generation failed: {e}")
    return clean_response(content)
