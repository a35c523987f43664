"""Command-line interface for flowlint."""

import argparse
import sys
from pathlib import Path

import structlog

from flowlint import __version__
from flowlint.analysis.linter import lint_source
from flowlint.config import settings
from flowlint.log import configure_logging
from flowlint.parsing import export_report
from flowlint.parsing.sanitize import sanitize
from flowlint.synthesis.fix_generator import apply_fix, generate_fixes

logger = structlog.get_logger()


def main() -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if args.version:
        print_version()
        return

    configure_logging(quiet=getattr(args, "quiet", False))

    if args.command == "lint":
        lint_command(args)
    elif args.command == "fix":
        fix_command(args)
    elif args.command == "sanitize":
        sanitize_command(args)
    elif args.command == "serve":
        serve_command(args)
    else:
        parser.print_help()
        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="flowlint",
        description="flowlint - flowchart diagram linter",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Lint command
    lint_parser = subparsers.add_parser("lint", help="Report issues in a diagram file")
    lint_parser.add_argument("file", type=str, help="Diagram source file")
    lint_parser.add_argument(
        "-o", "--output",
        type=str,
        help="Output file path",
    )
    lint_parser.add_argument(
        "-f", "--format",
        type=str,
        choices=["json", "sarif", "console"],
        default="console",
        help="Output format (default: console)",
    )
    lint_parser.add_argument(
        "--sorted",
        action="store_true",
        help="Sort issues by line instead of analyzer order",
    )
    lint_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output",
    )

    # Fix command
    fix_parser = subparsers.add_parser("fix", help="Apply one quick-fix to a diagram file")
    fix_parser.add_argument("file", type=str, help="Diagram source file")
    fix_parser.add_argument(
        "--issue",
        type=int,
        default=0,
        help="Index of the issue to fix, as shown by 'lint' (default: 0)",
    )
    fix_parser.add_argument(
        "--sorted",
        action="store_true",
        help="Index issues by line, matching 'lint --sorted'",
    )
    fix_parser.add_argument(
        "--candidate",
        type=int,
        default=0,
        help="Index of the candidate fix for that issue (default: 0)",
    )
    fix_parser.add_argument(
        "-o", "--output",
        type=str,
        help="Write the fixed source here instead of printing it",
    )
    fix_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output",
    )

    # Sanitize command
    sanitize_parser = subparsers.add_parser(
        "sanitize", help="Print the source as handed to the renderer"
    )
    sanitize_parser.add_argument("file", type=str, help="Diagram source file")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=settings.api_host)
    serve_parser.add_argument("--port", type=int, default=settings.api_port)

    return parser


def print_version() -> None:
    """Print version information."""
    print(f"flowlint v{__version__}")
    print()
    print("Checks:")
    print("  - Unknown graph direction")
    print("  - Unbalanced subgraph/end")
    print("  - Possible node reference typos")
    print()
    print("Export formats:")
    print("  - JSON, SARIF, Console")


def read_source(path: str) -> str:
    """Read a diagram file, exiting with status 1 if it does not exist."""
    file_path = Path(path)
    if not file_path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    return file_path.read_bytes().decode("utf-8", errors="replace")


def lint_command(args: argparse.Namespace) -> None:
    """Execute lint command."""
    source_text = read_source(args.file)

    result = lint_source(source_text, file_path=args.file, sort=args.sorted)
    output = export_report(result, format=args.format, output_path=args.output)

    if args.output:
        print(f"Report saved to: {args.output}")
    else:
        print(output)

    if "error" in result.summary:
        print(f"\nAnalysis error: {result.summary['error']}", file=sys.stderr)
        sys.exit(1)

    if result.issues:
        sys.exit(1)


def fix_command(args: argparse.Namespace) -> None:
    """Execute fix command."""
    source_text = read_source(args.file)
    result = lint_source(source_text, file_path=args.file, sort=args.sorted)

    if not 0 <= args.issue < len(result.issues):
        print(f"Error: No issue with index {args.issue}", file=sys.stderr)
        sys.exit(1)

    issue = result.issues[args.issue]
    fixes = generate_fixes(issue)
    if not 0 <= args.candidate < len(fixes):
        print(
            f"Error: Issue {args.issue} has no fix candidate {args.candidate}",
            file=sys.stderr,
        )
        sys.exit(1)

    fixed = apply_fix(source_text, fixes[args.candidate])
    logger.info(
        "fix_applied",
        file_path=args.file,
        kind=issue.kind.value,
        line=issue.line,
        changed=fixed != source_text,
    )

    if args.output:
        Path(args.output).write_text(fixed)
        print(f"Fixed source saved to: {args.output}")
    else:
        print(fixed)


def sanitize_command(args: argparse.Namespace) -> None:
    """Execute sanitize command."""
    print(sanitize(read_source(args.file)))


def serve_command(args: argparse.Namespace) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "flowlint.main:app",
        host=args.host,
        port=args.port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
