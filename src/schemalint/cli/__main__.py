"""
Main Entry Point for the schemalint CLI.

Parses arguments and dispatches to the handlers re-exported by
``schemalint.cli.commands``.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from schemalint import __version__
from schemalint.cli import commands
from schemalint.utils.console import console


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 clean, 1 diagnostics found, 2 errors).
  """
  parser = argparse.ArgumentParser(description="schemalint: static checks for provider schema declarations")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Run rules over Python files or directories")
  cmd_check.add_argument("paths", type=Path, nargs="+", help="Input source files or directories")
  cmd_check.add_argument("--json", action="store_true", help="Print diagnostics as JSON")
  cmd_check.add_argument("--jobs", type=int, default=None, help="Analyze N files concurrently")
  cmd_check.add_argument("--disable", nargs="+", default=None, metavar="RULE", help="Rules to skip")
  cmd_check.add_argument(
    "--schema-type",
    nargs="+",
    default=None,
    metavar="QUALNAME",
    help="Qualified name(s) of the schema type (default: from toml or tfsdk.helper.schema.Schema)",
  )
  cmd_check.add_argument(
    "--resource-data-type",
    nargs="+",
    default=None,
    metavar="QUALNAME",
    help="Qualified name(s) of the resource data type",
  )

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="List available rules")

  # --- Command: SETS ---
  cmd_sets = subparsers.add_parser("sets", help="List resource data setter calls")
  cmd_sets.add_argument("paths", type=Path, nargs="+", help="Input source files or directories")

  args = parser.parse_args(argv)

  if args.verbose:
    console.set_level(logging.DEBUG)

  if args.command == "check":
    return commands.handle_check(
      args.paths,
      json_mode=args.json,
      jobs=args.jobs,
      disabled_rules=args.disable,
      schema_types=args.schema_type,
      resource_data_types=args.resource_data_type,
    )

  elif args.command == "rules":
    return commands.handle_rules()

  elif args.command == "sets":
    return commands.handle_sets(args.paths)

  return 2


if __name__ == "__main__":
  raise SystemExit(main())
