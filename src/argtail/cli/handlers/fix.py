"""
Fix Command Handler.

This module implements the logic for the `argtail fix` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. File enumeration.
3. Patching via the Engine.
4. Checkout-for-edit, write-back, diffs and trace logging.
"""

import difflib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from argtail.cli.handlers.files import checkout_for_edit, collect_go_files
from argtail.config import RuntimeConfig
from argtail.core.engine import PatchEngine, PatchResult
from argtail.core.errors import CheckoutError
from argtail.enums import PatchOutcome
from argtail.utils.console import console, log_error, log_info, log_success, log_warning


@dataclass
class FileReport:
  """What happened to one file during a batch."""

  path: Path
  result: Optional[PatchResult] = None
  error: Optional[str] = None
  written: bool = False

  @property
  def failed(self) -> bool:
    return self.error is not None or (self.result is not None and not self.result.success)


def handle_fix(
  paths: List[Path],
  checkout_cmd: Optional[List[str]] = None,
  function_name: Optional[str] = None,
  dry_run: Optional[bool] = None,
  show_diff: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'fix' command execution.

  Args:
      paths: Go files or directories to patch.
      checkout_cmd: Override for the checkout-for-edit command.
      function_name: Override for the function receiving the guard.
      dry_run: If True, nothing is written.
      show_diff: If True, prints a unified diff for every rewritten file.
      json_trace_path: Optional path to dump execution traces as JSON.

  Returns:
      int: Exit code (0 for success, 1 if any file failed).
  """
  search_path = paths[0] if paths else Path.cwd()
  config = RuntimeConfig.load(
    function_name=function_name,
    checkout_command=checkout_cmd,
    dry_run=dry_run,
    search_path=search_path if search_path.is_dir() else search_path.parent,
  )

  files, missing = collect_go_files(paths, config.skip_dirs)
  for path in missing:
    log_error(f"Input not found: [path]{path}[/path]")

  if not files:
    log_warning("No .go files found.")
    return 1 if missing else 0

  if len(files) > 1:
    log_info(f"Processing {len(files)} files...")

  engine = PatchEngine(config)
  reports: List[FileReport] = [_fix_single_file(path, engine, config, show_diff) for path in files]

  if json_trace_path:
    _write_traces(json_trace_path, reports)

  _print_batch_summary(reports, config.dry_run)
  return 1 if missing or any(r.failed for r in reports) else 0


def _fix_single_file(path: Path, engine: PatchEngine, config: RuntimeConfig, show_diff: bool) -> FileReport:
  """
  Patches one file and writes it back.

  Args:
      path: The Go file.
      engine: The shared engine.
      config: Runtime configuration (checkout command, dry run).
      show_diff: Whether to print a unified diff.

  Returns:
      FileReport: The outcome, including driver-side failures.
  """
  report = FileReport(path=path)
  try:
    with open(path, "rt", encoding="utf-8", newline="") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    report.error = f"Could not read file: {e}"
    log_error(f"[path]{path}[/path]: {escape(report.error)}")
    return report

  result = engine.run(code, str(path))
  report.result = result

  if result.outcome.is_noop:
    log_info(f"[path]{path}[/path]: Nothing to do ({escape('; '.join(result.errors))})")
    return report
  if result.outcome == PatchOutcome.STRUCTURAL_ERROR:
    # The parser diagnostic already carries the file position.
    log_error(escape("; ".join(result.errors)))
    return report
  if not result.success:
    log_error(f"[path]{path}[/path]: {escape('; '.join(result.errors))}")
    return report

  if show_diff:
    console.print(render_diff(code, result.code, str(path)), markup=False, highlight=False, end="")

  if config.dry_run:
    log_info(f"[path]{path}[/path]: Would add trailing argument check")
    return report

  try:
    checkout_for_edit(config.checkout_command, path)
    with open(path, "wt", encoding="utf-8", newline="") as f:
      f.write(result.code)
  except CheckoutError as e:
    report.error = str(e)
    log_error(f"[path]{path}[/path]: {escape(report.error)}")
    return report
  except OSError as e:
    report.error = f"Could not write file: {e}"
    log_error(f"[path]{path}[/path]: {escape(report.error)}")
    return report

  report.written = True
  log_success(f"Patched: [path]{path}[/path]")
  return report


def render_diff(before: str, after: str, filename: str) -> str:
  """
  Renders a unified diff between two versions of a file.

  Args:
      before: Original text.
      after: Rewritten text.
      filename: Name shown in the diff headers.

  Returns:
      str: The diff, empty if the texts are equal.
  """
  lines = difflib.unified_diff(
    before.splitlines(keepends=True),
    after.splitlines(keepends=True),
    fromfile=f"a/{filename}",
    tofile=f"b/{filename}",
  )
  return "".join(lines)


def _write_traces(json_trace_path: Path, reports: List[FileReport]) -> None:
  traces: Dict[str, Any] = {str(r.path): r.result.trace_events for r in reports if r.result is not None}
  try:
    json_trace_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_trace_path, "wt", encoding="utf-8") as f:
      json.dump(traces, f, indent=2)
    log_info(f"Trace saved to [path]{json_trace_path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {e}")


def _print_batch_summary(reports: List[FileReport], dry_run: bool) -> None:
  """
  Renders a summary table of the batch to the console.

  Args:
      reports: One report per processed file.
      dry_run: Whether files were left untouched.
  """
  total = len(reports)
  patched = sum(1 for r in reports if r.result is not None and r.result.changed and not r.failed)
  failures = [r for r in reports if r.failed]

  verb = "would be patched" if dry_run else "patched"
  if not failures:
    log_success(f"Batch Complete: {patched}/{total} files {verb}.")
    return

  table = Table(title="Patch Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for report in failures:
    if report.error is not None:
      issues = report.error
    else:
      issues = "; ".join(report.result.errors) if report.result.has_errors else "Unknown Error"
    table.add_row(escape(str(report.path)), "❌ Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {patched} {verb}, {len(failures)} failed, {total} total.")
