"""
argtail Package.

A source patcher for Go programs that parse command line flags but never look
at the arguments left over after parsing. For such programs a guard is inserted
right after ``flag.Parse()`` in ``main``::

    if flag.NArg() != 0 {
        log.Fatalf("Trailing args not expected: %q", flag.Args())
    }

and the ``flag`` and ``log`` imports are added when missing.

Usage
-----

Simple String Patching
^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import argtail
    patched = argtail.fix(source, filename="main.go")

Advanced Usage (Patch Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from argtail import PatchEngine, RuntimeConfig

    engine = PatchEngine(RuntimeConfig(function_name="main"))
    res = engine.run(source, "main.go")

    if res.changed:
        print(res.code)
    else:
        print(res.outcome, res.errors)
"""

from typing import Optional

from argtail.config import RuntimeConfig
from argtail.core.engine import PatchEngine, PatchResult
from argtail.enums import PatchOutcome

__version__ = "0.1.0"


def fix(code: str, filename: str = "<input>", function_name: str = "main") -> str:
  """
  Patches a string of Go code.

  This is a convenience wrapper around `PatchEngine.patch`. Use
  `PatchEngine.run` to receive outcomes as values instead of exceptions.

  Args:
      code (str): The Go source code.
      filename (str): Name used in diagnostics.
      function_name (str): The function that receives the guard.

  Returns:
      str: The patched source code.

  Raises:
      StructuralError: If the code does not parse.
      NothingToDo: If the file needs no guard (see its subclasses).
      InsertPointNotFound: If the function has no ``flag.Parse()`` statement.
  """
  engine = PatchEngine(RuntimeConfig(function_name=function_name))
  return engine.patch(code, filename)


def check(code: str, filename: str = "<input>", engine: Optional[PatchEngine] = None) -> PatchOutcome:
  """
  Reports what patching `code` would do, without returning the new text.
  """
  return (engine or PatchEngine()).run(code, filename).outcome


__all__ = [
  "PatchEngine",
  "PatchOutcome",
  "PatchResult",
  "RuntimeConfig",
  "check",
  "fix",
  "__version__",
]
