"""
Enumerations for argtail.

This module defines the outcomes the patch engine reports for a file.
"""

from enum import Enum


class PatchOutcome(str, Enum):
  """
  Result category of processing one file.

  Only `REWRITTEN` carries output text. The three no-op outcomes mean "no change
  made"; `STRUCTURAL_ERROR` and `INSERT_POINT_NOT_FOUND` are failures.
  """

  REWRITTEN = "rewritten"
  NO_PARSE_CALLS = "no_parse_calls"  # flag.Parse never referenced
  ALREADY_CHECKING = "already_checking"  # flag.Args / flag.NArg already used
  FUNCTION_NOT_FOUND = "function_not_found"  # no top-level main
  STRUCTURAL_ERROR = "structural_error"  # input does not parse
  INSERT_POINT_NOT_FOUND = "insert_point_not_found"  # main has no flag.Parse() statement

  @property
  def is_noop(self) -> bool:
    return self in (PatchOutcome.NO_PARSE_CALLS, PatchOutcome.ALREADY_CHECKING, PatchOutcome.FUNCTION_NOT_FOUND)

  @property
  def is_failure(self) -> bool:
    return self in (PatchOutcome.STRUCTURAL_ERROR, PatchOutcome.INSERT_POINT_NOT_FOUND)
