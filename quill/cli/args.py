"""CLI Argument Parsing"""

import argparse
import sys

import argcomplete

from quill import __version__

SUBCOMMANDS = {'commit', 'changelog', 'cl', 'release', 'config'}
TOP_LEVEL_FLAGS = {'-h', '--help', '-V', '--version'}
COMMAND_ALIASES = {'cl': 'changelog'}


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    # SUPPRESS keeps a subcommand from resetting a --verbose given before it
    parser.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS,
                        help='Show debug info (provider, prompt size, tokens used)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quill',
        description='AI-powered commit messages, changelogs and releases',
        epilog='Example: quill (generate a message for staged changes)'
    )

    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (provider, prompt size, tokens used)')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    commit = subparsers.add_parser('commit', help='Generate a commit message for staged changes (default)')
    commit.add_argument('message', nargs='?', metavar='MESSAGE', help='Use this message instead of generating one')
    commit.add_argument('-a', '--all', action='store_true', help='Stage all changes before committing')
    commit.add_argument('-y', '--yes', action='store_true', help='Skip confirmation prompts')
    _add_verbose(commit)

    changelog = subparsers.add_parser('changelog', aliases=['cl'], help='Generate a changelog entry for a commit range')
    changelog.add_argument('-f', '--from', dest='from_ref', metavar='REF', help='Starting reference (tag, commit, branch)')
    changelog.add_argument('-t', '--to', dest='to_ref', default='HEAD', metavar='REF', help='Ending reference (default: HEAD)')
    _add_verbose(changelog)

    release = subparsers.add_parser('release', help='Commit, update changelog, tag and push')
    release.add_argument('-f', '--from', dest='from_ref', metavar='REF', help='Starting reference (default: latest tag)')
    release.add_argument('-v', '--version', dest='version', metavar='VERSION', help='Release version (default: detected from manifest)')
    release.add_argument('-t', '--tag', action='store_true', help='Create the release tag without asking')
    release.add_argument('-p', '--push', action='store_true', help='Push to remote without asking')
    release.add_argument('-y', '--yes', action='store_true', help='Skip all confirmation prompts')
    _add_verbose(release)

    config = subparsers.add_parser('config', help='Show or change model configuration')
    config.add_argument('--commit-model', metavar='PROVIDER/MODEL', help='Model for commit messages')
    config.add_argument('--changelog-model', metavar='PROVIDER/MODEL', help='Model for changelogs')
    config.add_argument('--list-models', action='store_true', help='List available providers and models')
    _add_verbose(config)

    return parser


def with_default_command(argv: list[str]) -> list[str]:
    """Insert 'commit' when no subcommand is given, so `quill -a` means `quill commit -a`."""
    for i, arg in enumerate(argv):
        if arg == '--verbose':
            continue
        if arg in SUBCOMMANDS or arg in TOP_LEVEL_FLAGS:
            return argv
        return argv[:i] + ['commit'] + argv[i:]
    return argv + ['commit']


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)

    argv = sys.argv[1:] if argv is None else list(argv)
    args = parser.parse_args(with_default_command(argv))
    args.command = COMMAND_ALIASES.get(args.command, args.command)
    return args
