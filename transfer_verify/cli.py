"""Command-line interface for verifying SB project exports against S3 buckets."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .errors import ConfigurationError
from .report import print_run_summary
from .settings import apply_environment_defaults, load_environment, settings_from_args
from .workflow import PairSpec, build_verifier

DESCRIPTION = """\
Verify that every file in a Seven Bridges project was exported to an AWS bucket.
Files are matched by path (relative to the project folder and bucket prefix)
and exact size; size mismatches, files missing from the bucket, and extra files
in the bucket are reported. Repeat --source and --target for multiple pairs.
"""

EPILOG = "Example: verify-transfers -d big-shot -p cb_bshot -s 12345r -t my-bucket/12345R--exp1"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="verify-transfers",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        default=[],
        metavar="PROJECT[/FOLDER]",
        help="Seven Bridges source project, folders allowed (repeatable).",
    )
    parser.add_argument(
        "-t",
        "--target",
        action="append",
        default=[],
        metavar="BUCKET[/PREFIX]",
        help="AWS target bucket, prefixes allowed (repeatable, paired with --source by order).",
    )
    parser.add_argument("-d", "--division", help="Seven Bridges division (or $SBG_DIVISION).")
    parser.add_argument("-p", "--profile", help="AWS credentials profile (or $AWS_PROFILE).")
    parser.add_argument(
        "--sbcred",
        metavar="FILE",
        help="Seven Bridges credentials file (default: ~/.sevenbridges/credentials).",
    )
    parser.add_argument(
        "--awscred",
        metavar="FILE",
        help="AWS credentials file (default: ~/.aws/credentials).",
    )
    parser.add_argument("--region", help="AWS region for the S3 client (or $AWS_DEFAULT_REGION).")
    parser.add_argument("--env-file", help="Optional .env file providing fallback settings.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser


def _validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if not args.division:
        parser.error("Seven Bridges division name is required (--division).")
    if not args.profile:
        parser.error("AWS IAM connection profile is required (--profile).")
    if not args.source or not args.target:
        parser.error("Both sources and targets must be specified.")
    if len(args.source) != len(args.target):
        parser.error("Must provide equal numbers of sources and targets.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """Parse arguments, configure logging, fill environment fallbacks, and validate."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    load_environment(args.env_file)
    apply_environment_defaults(args)
    _validate_args(args, parser)
    return args


def _run(args: argparse.Namespace) -> int:
    try:
        verifier = build_verifier(settings_from_args(args))
    except ConfigurationError as exc:
        logging.error("%s", exc)
        return 1

    pairs = [PairSpec(source, target) for source, target in zip(args.source, args.target)]
    outcomes = verifier.run(pairs)
    print_run_summary(outcomes)

    if not any(outcome.succeeded for outcome in outcomes):
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run verification for every source/target pair; returns the process exit code."""
    arg_list: List[str] = list(sys.argv[1:] if argv is None else argv)
    if not arg_list:
        build_parser().print_help()
        return 0

    args = parse_args(arg_list)
    try:
        return _run(args)
    except KeyboardInterrupt:
        print("\n✗ Transfer verification interrupted by user.", file=sys.stderr)
        return 130


__all__ = ["build_parser", "main", "parse_args"]
