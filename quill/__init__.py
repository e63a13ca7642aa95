"""
Quill

AI-assisted git commits, changelogs, and releases.
"""

__version__ = "0.1.0"

# Centralized commit types - single source of truth
# Used by: llm/base.py (validation), prompts/templates.py, output (colors)
COMMIT_TYPES = {
    'feat': 'A new feature',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Changes that do not affect the meaning of the code',
    'refactor': 'A code change that neither fixes a bug nor adds a feature',
    'perf': 'A code change that improves performance',
    'test': 'Adding missing tests or correcting existing tests',
    'chore': 'Changes to the build process or auxiliary tools',
    'ci': 'CI/CD configuration changes',
    'build': 'Build system or external dependency changes',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Files Quill owns inside the working directory
CONFIG_DIR = ".quill"
CHANGELOG_FILENAME = "CHANGELOG.md"
