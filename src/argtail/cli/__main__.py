"""
Main Entry Point for the argtail CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `argtail.cli.commands`.
"""

import argparse
import shlex
from pathlib import Path
from typing import List, Optional

from argtail import __version__
from argtail.cli import commands
from argtail.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="argtail: Reject unexpected trailing arguments in Go programs")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: FIX ---
  cmd_fix = subparsers.add_parser("fix", help="Insert the trailing argument check into Go files")
  cmd_fix.add_argument("paths", type=Path, nargs="+", help="Go files or directories")
  cmd_fix.add_argument(
    "--checkout-cmd",
    default=None,
    help="Command run before writing each file, e.g. 'p4 edit' (default: from toml, else none)",
  )
  cmd_fix.add_argument("--function", default=None, help="Function receiving the check (default: main)")
  cmd_fix.add_argument("--dry-run", action="store_true", default=None, help="Do not write any file")
  cmd_fix.add_argument("--diff", action="store_true", help="Print a unified diff for each patched file")
  cmd_fix.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace of every file to a JSON file."
  )

  # --- Command: AUDIT ---
  cmd_audit = subparsers.add_parser("audit", help="List Go files that lack the trailing argument check")
  cmd_audit.add_argument("paths", type=Path, nargs="+", help="Go files or directories")
  cmd_audit.add_argument("--function", default=None, help="Function receiving the check (default: main)")
  cmd_audit.add_argument("--all", dest="show_all", action="store_true", help="List every scanned file")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "fix":
    checkout = shlex.split(args.checkout_cmd) if args.checkout_cmd is not None else None
    return commands.handle_fix(args.paths, checkout, args.function, args.dry_run, args.diff, args.json_trace)

  elif args.command == "audit":
    return commands.handle_audit(args.paths, args.function, args.show_all)

  return 0


if __name__ == "__main__":
  raise SystemExit(main())
