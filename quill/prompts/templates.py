"""Built-in prompt templates, written to .quill/ on first use."""

from quill import COMMIT_TYPES

_TYPE_LINES = "\n".join(f"- {name}: {desc}" for name, desc in list(COMMIT_TYPES.items())[:8])

DEFAULT_COMMIT_PROMPT = f"""# Commit Message Guidelines

Generate commit messages following the Conventional Commits specification.

## Format
<type>: <description>
[optional body]

## Types
{_TYPE_LINES}

## Rules
1. Use lowercase for the type
2. No scope (use "feat:" not "feat(api):")
3. Use imperative mood ("add" not "added")
4. Keep the first line under 72 characters
5. Do not end the description with a period
6. Only return the commit message, no explanations
"""

DEFAULT_CHANGELOG_PROMPT = """# Changelog Generation Guidelines

Use the "Keep a Changelog" format (https://keepachangelog.com/).

## Structure
## [Version] - YYYY-MM-DD

### Added, Changed, Deprecated, Removed, Fixed, Security

## Rules
1. Group commits by type (feat -> Added, fix -> Fixed, etc.)
2. Write in past tense
3. Include commit hash in parentheses
4. Skip empty sections
5. Only return changelog content, no explanations
"""

MERGE_RULES = [
    "Preserve the existing structure and header",
    "Add the new entry in the correct chronological position (newest at top, after header)",
    "Avoid duplicate entries",
    'If the new entry is "[Unreleased]", replace any existing "[Unreleased]" section instead of adding a second one',
    "Return only the merged changelog content, no explanations",
]
