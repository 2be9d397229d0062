"""
Patcher Exceptions.

Two families are distinguished:

1.  **No-ops** (`NothingToDo` subclasses): the file does not need or cannot
    receive the guard. Callers log them and move on to the next file.
2.  **Failures**: the input does not parse (`StructuralError`), the rewriter hit
    an inconsistent tree (`InsertPointNotFound`), or the driver could not
    prepare the file for writing (`CheckoutError`).
"""

from typing import Optional


class ArgtailError(Exception):
  """Base class for all patcher errors."""


class StructuralError(ArgtailError):
  """
  Raised when the input text is not a well-formed Go file.

  Attributes:
      filename (str): The file being processed.
      message (str): The parser diagnostic.
      line (Optional[int]): 1-based line of the first error.
      column (Optional[int]): 1-based column of the first error.
  """

  def __init__(self, filename: str, message: str, line: Optional[int] = None, column: Optional[int] = None):
    self.filename = filename
    self.message = message
    self.line = line
    self.column = column
    location = filename
    if line is not None:
      location = f"{filename}:{line}:{column}"
    super().__init__(f"Failed to parse {location}: {message}")


class NothingToDo(ArgtailError):
  """Base class for the expected, non-fatal outcomes."""


class NoParseCalls(NothingToDo):
  def __init__(self) -> None:
    super().__init__("no flag parse calls found")


class AlreadyChecking(NothingToDo):
  def __init__(self) -> None:
    super().__init__("code already checking trailing args")


class FunctionNotFound(NothingToDo):
  def __init__(self, name: str = "main") -> None:
    self.name = name
    super().__init__(f"function to modify not found: {name}")


class InsertPointNotFound(ArgtailError):
  """
  Raised when the target function holds no ``flag.Parse()`` statement even though
  the file calls it somewhere else. No partial mutation is applied.
  """

  def __init__(self, function: str) -> None:
    self.function = function
    super().__init__(f"no flag.Parse() statement in the body of {function}()")


class CheckoutError(ArgtailError):
  """Raised when the checkout-for-edit command fails for a file."""
