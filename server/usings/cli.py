"""
Command-line entry point: organize the using directives of C# files.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import FormatOptions, find_config_file, load_config
from .diagnostics import StaticDiagnosticProvider, load_diagnostics_file
from .organizer import UsingBlockOrganizer
from .project import ProjectValidator
from .types import STATIC_PLACEMENTS, SourceDocument

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGES = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="organize-usings",
        description="Sort, group and prune C# using directives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  organize-usings src/Program.cs
  organize-usings --check --sort-order "System Microsoft" src/*.cs
  organize-usings --diagnostics diags.json --stdout src/Program.cs
        """
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="C# source files to organize"
    )

    parser.add_argument(
        "--config",
        help="Path to configuration file (default: searched upward from the first path)"
    )

    parser.add_argument(
        "--diagnostics",
        help="JSON file holding analyzer diagnostics for the file (one path only)"
    )

    parser.add_argument(
        "--sort-order",
        help="Space-separated namespace prefixes that sort first"
    )

    parser.add_argument(
        "--no-split-groups",
        action="store_true",
        help="Do not separate namespace groups with blank lines"
    )

    parser.add_argument(
        "--disable-unused-removal",
        action="store_true",
        help="Keep directives reported as unused"
    )

    parser.add_argument(
        "--process-conditional-blocks",
        action="store_true",
        help="Also remove unused directives inside #if/#region blocks"
    )

    parser.add_argument(
        "--static-placement",
        choices=STATIC_PLACEMENTS,
        help="Where 'using static' directives go"
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Write nothing; exit with 1 if any file would change"
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the organized text instead of writing it back"
    )

    parser.add_argument(
        "--skip-project-check",
        action="store_true",
        help="Remove unused directives without checking that the project is restored"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def resolve_options(args: argparse.Namespace) -> FormatOptions:
    """Config file values, overridden by command-line flags."""
    config_path = args.config or find_config_file(args.paths[0])
    config = load_config(config_path)
    logger.debug(f"Using config: {config_path or 'defaults'}")

    overrides = {}
    if args.sort_order is not None:
        overrides["sort_order"] = args.sort_order
    if args.no_split_groups:
        overrides["split_groups"] = False
    if args.disable_unused_removal:
        overrides["disable_unused_removal"] = True
    if args.process_conditional_blocks:
        overrides["process_directives_in_conditional_blocks"] = True
    if args.static_placement:
        overrides["static_placement"] = args.static_placement
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Diagnostic line numbers refer to a single document
    if args.diagnostics and len(args.paths) > 1:
        print("ERROR: --diagnostics applies to a single file; pass one path", file=sys.stderr)
        return EXIT_FAILURE

    config = resolve_options(args)

    try:
        provider = load_diagnostics_file(args.diagnostics) if args.diagnostics else StaticDiagnosticProvider()
    except (OSError, ValueError) as e:
        print(f"ERROR: could not read diagnostics: {e}", file=sys.stderr)
        return EXIT_FAILURE

    validator = None if args.skip_project_check else ProjectValidator()
    organizer = UsingBlockOrganizer(config, provider, validator)

    exit_code = EXIT_OK
    for path in args.paths:
        try:
            document = SourceDocument.from_file(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"ERROR: {path}: {e}", file=sys.stderr)
            exit_code = EXIT_FAILURE
            continue

        result = organizer.organize(document)
        if not result.success:
            print(f"{path}: {result.message}", file=sys.stderr)
            exit_code = EXIT_FAILURE
            continue

        if not result.has_changes():
            if args.stdout:
                sys.stdout.write(document.content)
            continue

        if args.check:
            print(f"would reorganize {path}")
            if exit_code == EXIT_OK:
                exit_code = EXIT_CHANGES
        elif args.stdout:
            sys.stdout.write(result.content)
        else:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(result.content)
            print(f"reorganized {path}")

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
