"""
File Helpers for the Command Handlers.

Enumerates the Go files named on the command line and prepares files for
writing through an optional checkout-for-edit command (``p4 edit``,
``g4 edit``, ...).
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from argtail.core.errors import CheckoutError

logger = logging.getLogger(__name__)

GO_SUFFIX = ".go"


def collect_go_files(paths: Iterable[Path], skip_dirs: Sequence[str] = ()) -> Tuple[List[Path], List[Path]]:
  """
  Expands files and directories into a sorted list of Go files.

  Directories are walked recursively. Hidden directories and directories named
  in `skip_dirs` are not descended into. Files named explicitly are kept even
  when they would be skipped by a walk.

  Args:
      paths: Files or directories from the command line.
      skip_dirs: Directory names to prune.

  Returns:
      Tuple[List[Path], List[Path]]: The Go files found, and the inputs that
      do not exist.
  """
  found: List[Path] = []
  missing: List[Path] = []
  skipped = set(skip_dirs)

  for path in paths:
    if path.is_file():
      if path.suffix == GO_SUFFIX:
        found.append(path)
      else:
        logger.debug("Ignoring non-Go file %s", path)
    elif path.is_dir():
      for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if not d.startswith(".") and d not in skipped)
        for name in sorted(files):
          if name.endswith(GO_SUFFIX):
            found.append(Path(root) / name)
    else:
      missing.append(path)

  # A file may be reachable from two arguments.
  unique = list(dict.fromkeys(found))
  return unique, missing


def checkout_for_edit(command: Sequence[str], path: Path) -> None:
  """
  Runs the checkout-for-edit command with `path` appended.

  Args:
      command: The command and its leading arguments. Empty means no checkout.
      path: The file about to be written.

  Raises:
      CheckoutError: If the command cannot be started or exits non-zero.
  """
  if not command:
    return

  argv = [*command, str(path)]
  logger.debug("Running %s", " ".join(argv))
  try:
    proc = subprocess.run(argv, capture_output=True, text=True)
  except OSError as e:
    raise CheckoutError(f"Could not run {command[0]!r}: {e}") from e

  if proc.returncode != 0:
    detail = (proc.stderr or proc.stdout or "").strip()
    raise CheckoutError(f"{' '.join(argv)} failed with exit code {proc.returncode}: {detail}")
