"""
Orchestration Engine for Trailing-Argument Patching.

This module provides the `PatchEngine`, the primary driver of the patching
process for a single Go file. The pipeline is a short state machine:

1.  **Parsing**: Source text -> `SourceFile` tree. Malformed input stops here
    with a structural error.
2.  **Checking**:
    - No ``flag.Parse`` reference anywhere: nothing to do.
    - A ``flag.Args`` or ``flag.NArg`` reference anywhere: the program already
      inspects its leftover arguments; nothing to do.
3.  **Locating**: Find the top-level target function (``main``).
4.  **Mutating**: Insert the guard after ``flag.Parse()`` and add the ``flag``
    and ``log`` imports when missing.
5.  **Serializing**: Print the tree back to source text.

Each run owns its tree and its trace; engines can be used from several threads
or processes without coordination as long as each thread has its own engine.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from argtail.config import RuntimeConfig
from argtail.core.errors import (
  AlreadyChecking,
  ArgtailError,
  FunctionNotFound,
  InsertPointNotFound,
  NoParseCalls,
  StructuralError,
)
from argtail.core.golang import GoEmitter, GoParser, SourceFile
from argtail.core.import_fixer import ImportSet, ensure_imports
from argtail.core.rewriter import find_function, insert_guard
from argtail.core.scanners import contains_call
from argtail.core.symbols import FLAG_ARGS, FLAG_NARG, FLAG_PARSE, REQUIRED_IMPORTS
from argtail.core.tracer import TraceLogger
from argtail.enums import PatchOutcome

logger = logging.getLogger(__name__)

_OUTCOMES = {
  StructuralError: PatchOutcome.STRUCTURAL_ERROR,
  NoParseCalls: PatchOutcome.NO_PARSE_CALLS,
  AlreadyChecking: PatchOutcome.ALREADY_CHECKING,
  FunctionNotFound: PatchOutcome.FUNCTION_NOT_FOUND,
  InsertPointNotFound: PatchOutcome.INSERT_POINT_NOT_FOUND,
}


class PatchResult(BaseModel):
  """
  Structured result of processing a single file.
  """

  filename: str = Field(default="<input>", description="Name of the processed file.")
  outcome: PatchOutcome = Field(description="What the engine decided or why it stopped.")
  code: str = Field(default="", description="The rewritten source. Empty unless the file was rewritten.")
  errors: List[str] = Field(default_factory=list, description="Diagnostics for no-ops and failures.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="A log of internal trace events.")

  @property
  def changed(self) -> bool:
    """True if `code` holds rewritten source."""
    return self.outcome == PatchOutcome.REWRITTEN

  @property
  def success(self) -> bool:
    """True unless the file failed to parse or the rewriter hit a defect."""
    return not self.outcome.is_failure

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0


class PatchEngine:
  """
  The patching unit for one file at a time.

  This class holds the configuration and the tree-sitter parser; all per-file
  state (tree, trace) lives inside a single call to `run` or `patch`.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): Runtime configuration. Defaults are
            used when omitted.
    """
    self.config = config or RuntimeConfig()
    self.parser = GoParser()
    self.emitter = GoEmitter()

  @property
  def function_name(self) -> str:
    return self.config.function_name

  def parse(self, code: str, filename: str = "<input>") -> SourceFile:
    """
    Parses Go source into a mutable tree.

    Raises:
        StructuralError: If the code is not well-formed Go.
    """
    return self.parser.parse(code, filename)

  def to_source(self, tree: SourceFile) -> str:
    return self.emitter.emit(tree)

  def patch(self, code: str, filename: str = "<input>", tracer: Optional[TraceLogger] = None) -> str:
    """
    Runs the pipeline and returns the rewritten source.

    Args:
        code: Go source text.
        filename: Name used in diagnostics.
        tracer: Optional trace recorder.

    Returns:
        str: The rewritten source.

    Raises:
        StructuralError: The code does not parse.
        NoParseCalls: ``flag.Parse`` is never referenced.
        AlreadyChecking: ``flag.Args`` or ``flag.NArg`` is already referenced.
        FunctionNotFound: There is no top-level target function.
        InsertPointNotFound: The target function does not call ``flag.Parse()``.
    """
    tracer = tracer or TraceLogger()

    # --- PHASE 1: PARSING ---
    tracer.start_phase("Parsing", "Go Source -> Syntax Tree")
    tree = self.parse(code, filename)
    tracer.end_phase()

    # --- PHASE 2: CHECKING ---
    tracer.start_phase("Checking", "Applicability & Idempotence")
    if not contains_call(tree, FLAG_PARSE.module, FLAG_PARSE.symbol):
      tracer.log_inspection(str(FLAG_PARSE), "absent", "Program parses no flags")
      raise NoParseCalls()

    for ref in (FLAG_ARGS, FLAG_NARG):
      if contains_call(tree, ref.module, ref.symbol):
        tracer.log_inspection(str(ref), "present", "Program already reads leftover arguments")
        raise AlreadyChecking()
    tracer.end_phase()

    # --- PHASE 3: LOCATING ---
    tracer.start_phase("Locating", f"func {self.function_name}")
    body = find_function(tree, self.function_name)
    tracer.end_phase()

    # --- PHASE 4: MUTATING ---
    tracer.start_phase("Mutating", "Guard Insertion & Import Fixing")
    before = body.block.source if body.block is not None else ""
    insert_guard(body)
    tracer.log_mutation(f"func {self.function_name}", before, body.block.source)

    imports = ImportSet.from_tree(tree)
    for path in imports.aliased(REQUIRED_IMPORTS):
      logger.debug("%s: %r is only imported under another name", filename, path)
      tracer.log_warning(f"{path!r} is imported under another name; adding a plain import")
    for path in imports.missing(REQUIRED_IMPORTS):
      tracer.log_import(path)
    ensure_imports(tree, REQUIRED_IMPORTS, imports)
    tracer.end_phase()

    # --- PHASE 5: SERIALIZING ---
    tracer.start_phase("Serializing", "Syntax Tree -> Go Source")
    output = self.to_source(tree)
    tracer.end_phase()
    return output

  def run(self, code: str, filename: str = "<input>") -> PatchResult:
    """
    Executes the pipeline and reports the outcome as a value.

    Args:
        code (str): The input source string.
        filename (str): Name used in diagnostics.

    Returns:
        PatchResult: Outcome, rewritten code (if any) and trace.
    """
    tracer = TraceLogger()
    tracer.start_phase("Patch Pipeline", filename)
    try:
      output = self.patch(code, filename, tracer)
    except ArgtailError as e:
      outcome = _OUTCOMES.get(type(e))
      if outcome is None:
        raise
      tracer.end_all()
      logger.debug("%s: %s", filename, e)
      return PatchResult(filename=filename, outcome=outcome, errors=[str(e)], trace_events=tracer.export())

    tracer.end_all()
    return PatchResult(filename=filename, outcome=PatchOutcome.REWRITTEN, code=output, trace_events=tracer.export())
