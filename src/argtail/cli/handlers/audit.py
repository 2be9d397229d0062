"""
Audit Command Handler.

Reports which Go files would receive the trailing argument check, without
touching them.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from argtail.cli.handlers.files import collect_go_files
from argtail.config import RuntimeConfig
from argtail.core.engine import PatchEngine
from argtail.enums import PatchOutcome
from argtail.utils.console import console, log_error, log_success, log_warning

_STATUS = {
  PatchOutcome.REWRITTEN: "[yellow]needs guard[/yellow]",
  PatchOutcome.NO_PARSE_CALLS: "[green]no flags[/green]",
  PatchOutcome.ALREADY_CHECKING: "[green]checked[/green]",
  PatchOutcome.FUNCTION_NOT_FOUND: "[dim]no main[/dim]",
  PatchOutcome.STRUCTURAL_ERROR: "[red]parse error[/red]",
  PatchOutcome.INSERT_POINT_NOT_FOUND: "[red]no insert point[/red]",
}


def handle_audit(paths: List[Path], function_name: Optional[str] = None, show_all: bool = False) -> int:
  """
  Scans files and lists the ones that need the guard.

  Args:
      paths: Go files or directories.
      function_name: Override for the function receiving the guard.
      show_all: If True, lists every file, not only those needing attention.

  Returns:
      int: Exit code (0 if nothing is pending, 1 if any file needs the guard or
      could not be analyzed).
  """
  search_path = paths[0] if paths else Path.cwd()
  config = RuntimeConfig.load(
    function_name=function_name,
    search_path=search_path if search_path.is_dir() else search_path.parent,
  )

  files, missing = collect_go_files(paths, config.skip_dirs)
  for path in missing:
    log_error(f"Path not found: [path]{path}[/path]")

  engine = PatchEngine(config)
  outcomes: Dict[Path, PatchOutcome] = {}
  details: Dict[Path, str] = {}
  for path in files:
    try:
      code = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"[path]{path}[/path]: Could not read file: {escape(str(e))}")
      outcomes[path] = PatchOutcome.STRUCTURAL_ERROR
      details[path] = str(e)
      continue
    result = engine.run(code, str(path))
    outcomes[path] = result.outcome
    details[path] = "; ".join(result.errors)

  pending = [p for p, o in outcomes.items() if o == PatchOutcome.REWRITTEN]
  failed = [p for p, o in outcomes.items() if o.is_failure]

  table = Table(title="Trailing Argument Audit")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Detail", style="dim")
  for path, outcome in outcomes.items():
    if show_all or outcome == PatchOutcome.REWRITTEN or outcome.is_failure:
      table.add_row(escape(str(path)), _STATUS[outcome], escape(details[path]))

  if table.row_count:
    console.print(table)

  if pending:
    log_warning(f"{len(pending)} of {len(outcomes)} files need a trailing argument check.")
  elif not failed and not missing:
    log_success(f"All {len(outcomes)} files are up to date.")

  return 1 if pending or failed or missing else 0
