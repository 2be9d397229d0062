"""
CLI Command Handlers Facade.

This module re-exports handlers from `argtail.cli.handlers` so that tests can
patch them in one place.
"""

from argtail.cli.handlers.audit import handle_audit
from argtail.cli.handlers.files import checkout_for_edit, collect_go_files
from argtail.cli.handlers.fix import _fix_single_file, _print_batch_summary, handle_fix, render_diff

__all__ = [
  "_fix_single_file",
  "_print_batch_summary",
  "checkout_for_edit",
  "collect_go_files",
  "handle_audit",
  "handle_fix",
  "render_diff",
]
