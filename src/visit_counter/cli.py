"""Operator CLI for inspecting and pruning visitor records."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError

from visit_counter.adapters.config import AppConfig
from visit_counter.adapters.database import SqlAlchemyVisitorRepository, StorageClient
from visit_counter.domain.models import StorageError, VisitorRecord
from visit_counter.domain.ports import VisitorRepository


def configure_logging() -> None:
    """Log to stderr, keeping project loggers at ERROR so CLI output stays readable."""
    logging.basicConfig(
        level=logging.ERROR,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("visit_counter").setLevel(logging.ERROR)


def load_config() -> AppConfig:
    """Load configuration from the environment, exiting on invalid values."""
    try:
        return AppConfig()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)


def _record_to_dict(record: VisitorRecord) -> dict[str, Any]:
    return record.model_dump(mode="json")


def format_records(records: list[VisitorRecord]) -> str:
    """Render visitor records as an aligned text table."""
    if not records:
        return "No visitors recorded."
    ip_width = max(len("IP"), *(len(record.ip) for record in records))
    lines = [f"{'ID':>6}  {'IP':<{ip_width}}  {'VISITS':>8}"]
    for record in records:
        lines.append(f"{record.id:>6}  {record.ip:<{ip_width}}  {record.visits:>8}")
    lines.append(f"\n{len(records)} visitor(s), {sum(r.visits for r in records)} visit(s)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the admin CLI."""
    parser = argparse.ArgumentParser(
        description="Visitor Counter Admin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List every visitor with its count
  visit-counter-admin list

  # Show one visitor as JSON
  visit-counter-admin show 1.2.3.4 --json

  # Forget a visitor
  visit-counter-admin delete 1.2.3.4
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    list_parser = subparsers.add_parser("list", help="List all visitors")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    show_parser = subparsers.add_parser("show", help="Show the visitor for an IP address")
    show_parser.add_argument("ip", help="Client IP address")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    delete_parser = subparsers.add_parser("delete", help="Delete the visitor for an IP address")
    delete_parser.add_argument("ip", help="Client IP address")

    return parser


async def run_command(args: argparse.Namespace, repository: VisitorRepository) -> int:
    """Execute a parsed command against the repository and return the exit code."""
    if args.command == "list":
        records = await repository.find_all()
        if args.json:
            print(json.dumps([_record_to_dict(r) for r in records], indent=2))
        else:
            print(format_records(records))
        return 0

    if args.command == "show":
        record = await repository.find_one({"ip": args.ip})
        if record is None:
            print(f"No visitor recorded for {args.ip}", file=sys.stderr)
            return 1
        if args.json:
            print(json.dumps(_record_to_dict(record), indent=2))
        else:
            print(format_records([record]))
        return 0

    if args.command == "delete":
        deleted = await repository.delete({"ip": args.ip})
        print(f"Deleted {deleted} visitor(s) for {args.ip}")
        return 0 if deleted else 1

    raise ValueError(f"Unknown command: {args.command}")


async def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging()
    config = load_config()
    try:
        async with StorageClient(config.get_database_url(), echo=config.db_echo) as storage:
            await storage.sync_schema()
            exit_code = await run_command(args, SqlAlchemyVisitorRepository(storage))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
