"""
Qualified Call References.

The patcher recognizes and emits calls of the form ``module.Symbol(...)``. This
module names the references it works with.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class QualifiedCall:
  """
  A ``module.symbol`` pair, matched syntactically by package name and member.

  Attributes:
      module (str): The package identifier (e.g. ``flag``).
      symbol (str): The exported member (e.g. ``Parse``).
  """

  module: str
  symbol: str

  def __str__(self) -> str:
    return f"{self.module}.{self.symbol}"


FLAG_MODULE = "flag"
LOG_MODULE = "log"

FLAG_PARSE = QualifiedCall(FLAG_MODULE, "Parse")
FLAG_ARGS = QualifiedCall(FLAG_MODULE, "Args")
FLAG_NARG = QualifiedCall(FLAG_MODULE, "NArg")
LOG_FATALF = QualifiedCall(LOG_MODULE, "Fatalf")

GUARD_MESSAGE = "Trailing args not expected: %q"

REQUIRED_IMPORTS = (FLAG_MODULE, LOG_MODULE)
