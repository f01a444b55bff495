"""CLI entrypoint for the Lawyer Agent.

This module provides the main() function that serves as the entry point
for the 'lawyer-agent' command when installed via pip install -e .
"""

import argparse
import sys

from app.config import DEBUG
from app.config import DEFAULT_RESULT_LIMIT
from app.config import DEFAULT_SEARCH_MODE
from app.config import ENTRY_TYPES
from app.config import MAX_RESULT_LIMIT
from app.knowledge import KnowledgeBaseError
from app.logging import configure_logging
from app.scoring import SearchMode


def cmd_query(args: argparse.Namespace) -> int:
    """Handle the query command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    from app.output import OutputFormat
    from app.output import print_result
    from app.query import query

    if not 1 <= args.limit <= MAX_RESULT_LIMIT:
        print(f"Error: --limit must be between 1 and {MAX_RESULT_LIMIT}")
        return 1

    try:
        result = query(args.question, limit=args.limit, search_mode=args.search_mode)
    except KnowledgeBaseError as e:
        print(f"Error: {e}")
        return 3
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    output_format = OutputFormat.JSON if args.format == "json" else OutputFormat.CONSOLE
    print_result(result, output_format)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Handle the list command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    from app.knowledge import get_knowledge_base
    from app.output import print_entries

    try:
        kb = get_knowledge_base()
    except KnowledgeBaseError as e:
        print(f"Error: {e}")
        return 3

    entries = kb.by_type(args.type) if args.type else list(kb.entries)
    print_entries(entries)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the show command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    from app.knowledge import get_knowledge_base
    from app.output import print_entry

    try:
        kb = get_knowledge_base()
    except KnowledgeBaseError as e:
        print(f"Error: {e}")
        return 3

    entry = kb.get(args.entry_id)
    if entry is None:
        print(f"Error: Unknown entry id: {args.entry_id}")
        return 1

    print_entry(entry)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="lawyer-agent",
        description=(
            "Lawyer Agent - research assistant for Black's Law Dictionary "
            "entries, doctrines and obscure statutes"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lawyer-agent query "Explain champerty and whether it's still enforceable."
  lawyer-agent ask "List obscure blue laws that remain active today."
  lawyer-agent query --search-mode bm25 "quo warranto public officials"
  lawyer-agent ask --format json "consideration" > result.json
  lawyer-agent list --type statute
  lawyer-agent show champerty
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Query command
    query_parser = subparsers.add_parser(
        "query",
        aliases=["ask"],
        help="Ask a legal research question",
    )
    query_parser.add_argument(
        "question",
        type=str,
        help="Question to ask",
    )
    query_parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_RESULT_LIMIT,
        help=f"Maximum number of entries to return (default: {DEFAULT_RESULT_LIMIT})",
    )
    query_parser.add_argument(
        "--search-mode",
        type=str,
        choices=[m.value for m in SearchMode],
        default=DEFAULT_SEARCH_MODE,
        help="Scoring: weighted (field-weighted overlap, default) or bm25",
    )
    query_parser.add_argument(
        "--format",
        type=str,
        choices=["console", "json"],
        default="console",
        help="Output format: console (Rich styled, default) or json (structured)",
    )

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="List knowledge-base entries",
    )
    list_parser.add_argument(
        "--type",
        type=str,
        choices=ENTRY_TYPES,
        help="Only list entries of this type",
    )

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show one knowledge-base entry",
    )
    show_parser.add_argument(
        "entry_id",
        type=str,
        help="Entry id (see 'list')",
    )

    # Global options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint for the 'lawyer-agent' command.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(debug=args.debug or DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command in ("query", "ask"):
        return cmd_query(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "show":
        return cmd_show(args)
    else:
        parser.print_help()
        return 1


def cli_main() -> None:
    """Entry point wrapper that calls sys.exit().

    This is the function referenced in pyproject.toml [project.scripts].
    """
    sys.exit(main())
