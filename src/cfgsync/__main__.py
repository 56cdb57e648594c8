"""CLI entry point for cfgsync."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="cfgsync",
        description="Compile exec-linked .cfg trees and sync them with a GitHub gist",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile", help="Flatten a cfg and everything it execs into compiled.cfg"
    )
    compile_parser.add_argument(
        "cfg_dir",
        type=Path,
        help="The ./cfg directory; exec paths are resolved relative to it",
    )
    compile_parser.add_argument(
        "root_file",
        nargs="?",
        default=None,
        help="Root cfg relative to CFG_DIR, e.g. autoexec.cfg (default: from cfgsync.yml)",
    )
    compile_parser.add_argument(
        "--dry-run", action="store_true", help="Report the output size without writing it"
    )

    push_parser = subparsers.add_parser(
        "push", help="Upload a cfg and everything it execs to a gist"
    )
    push_parser.add_argument("cfg_dir", type=Path, metavar="CFG_DIR", help="The ./cfg directory")
    push_parser.add_argument(
        "root_file",
        nargs="?",
        default=None,
        metavar="AUTOEXEC.CFG",
        help="Root cfg relative to CFG_DIR (default: from cfgsync.yml)",
    )
    _add_remote_arguments(push_parser)
    push_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be uploaded without uploading"
    )

    pull_parser = subparsers.add_parser("pull", help="Write gist files back into a cfg directory")
    pull_parser.add_argument("cfg_dir", type=Path, metavar="CFG_DIR", help="The ./cfg directory")
    _add_remote_arguments(pull_parser)
    pull_parser.add_argument(
        "-u",
        "--update-only",
        action="store_true",
        help="Only overwrite files that already exist locally",
    )
    pull_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be written without writing"
    )

    return parser


def _add_remote_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--gist-id", default=None, help="The gist id to sync with")
    parser.add_argument(
        "-t",
        "--access-token",
        default=None,
        help="GitHub access token (default: CFGSYNC_ACCESS_TOKEN, GITHUB_TOKEN or gh CLI)",
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings_kwargs: dict = {}
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)

    if args.command == "compile":
        from .cli.compile import run_compile

        exit_code = run_compile(args.cfg_dir, args.root_file, dry_run=args.dry_run)
    elif args.command == "push":
        from .cli.push import run_push

        exit_code = run_push(
            args.cfg_dir,
            args.root_file,
            gist_id=args.gist_id,
            access_token=args.access_token,
            dry_run=args.dry_run,
            settings=settings,
        )
    else:
        from .cli.pull import run_pull

        exit_code = run_pull(
            args.cfg_dir,
            gist_id=args.gist_id,
            access_token=args.access_token,
            update_only=args.update_only,
            dry_run=args.dry_run,
            settings=settings,
        )

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
