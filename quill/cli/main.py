"""CLI Main Entry Point"""

import argparse
import sys

from quill.context import QuillContext
from quill.errors import OperationCancelled, QuillError
from quill.llm import register_cleanup
from quill.output import print_error, print_warning
from quill.release import ChangelogOptions, CommitOptions, ReleaseOptions

from quill.cli.args import parse_args
from quill.cli.commands import changelog_command, commit_command, config_command, release_command


def run_command(ctx: QuillContext, args: argparse.Namespace) -> int:
    """Dispatch parsed arguments to the matching command."""
    if args.command == 'commit':
        options = CommitOptions(message=args.message, all=args.all, yes=args.yes)
        return commit_command(ctx, options)
    if args.command == 'changelog':
        return changelog_command(ctx, ChangelogOptions(from_ref=args.from_ref, to_ref=args.to_ref))
    if args.command == 'release':
        options = ReleaseOptions(from_ref=args.from_ref, version=args.version,
                                 tag=args.tag, push=args.push, yes=args.yes)
        return release_command(ctx, options)
    if args.command == 'config':
        return config_command(ctx, args.commit_model, args.changelog_model, args.list_models)
    raise QuillError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None, ctx: QuillContext | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    if ctx is None:
        ctx = QuillContext.create(verbose=args.verbose)
    register_cleanup(ctx.backend)

    try:
        return run_command(ctx, args)
    except OperationCancelled as e:
        print_warning(str(e))
        return 0
    except KeyboardInterrupt:
        print()
        print_warning(str(OperationCancelled()))
        return 0
    except QuillError as e:
        print_error(str(e))
        return 1
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        return 1
    finally:
        ctx.backend.close()


if __name__ == '__main__':
    sys.exit(main())
