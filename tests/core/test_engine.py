"""
Tests for the PatchEngine pipeline.

Verifies:
1. The fixture programs produce the expected outcome and output.
2. Outcomes are reported as values; nothing is partially applied.
3. Idempotence: patching patched output is a no-op.
4. The trace records the pipeline phases and import warnings.
5. Deep nesting and CRLF files are handled.
"""

import pytest

import argtail
from argtail import PatchEngine, PatchOutcome, RuntimeConfig
from argtail.core.errors import AlreadyChecking, FunctionNotFound, InsertPointNotFound, NoParseCalls, StructuralError
from argtail.core.tracer import TraceEventType


@pytest.fixture
def engine():
  return PatchEngine()


def _read(testdata, name):
  return (testdata / name).read_text(encoding="utf-8")


def test_normal_fixture(engine, testdata):
  result = engine.run(_read(testdata, "normal_in.go"), "normal_in.go")

  assert result.outcome == PatchOutcome.REWRITTEN
  assert result.changed and result.success
  assert not result.has_errors
  assert result.code == _read(testdata, "normal_out.go")


@pytest.mark.parametrize(
  "name, outcome",
  [
    ("nomain", PatchOutcome.FUNCTION_NOT_FOUND),
    ("noparse", PatchOutcome.NO_PARSE_CALLS),
    ("already_checking", PatchOutcome.ALREADY_CHECKING),
  ],
)
def test_noop_fixtures(engine, testdata, name, outcome):
  result = engine.run(_read(testdata, f"{name}_in.go"), f"{name}_in.go")

  assert result.outcome == outcome
  assert result.outcome.is_noop
  assert result.success and not result.changed
  assert result.code == ""
  assert len(result.errors) == 1


@pytest.mark.parametrize(
  "name, error",
  [
    ("normal", None),
    ("nomain", FunctionNotFound),
    ("noparse", NoParseCalls),
    ("already_checking", AlreadyChecking),
  ],
)
def test_fix_convenience(testdata, name, error):
  code = _read(testdata, f"{name}_in.go")
  if error is None:
    assert argtail.fix(code, f"{name}_in.go") == _read(testdata, f"{name}_out.go")
  else:
    with pytest.raises(error):
      argtail.fix(code, f"{name}_in.go")


def test_patched_output_is_already_checking(engine, testdata):
  once = engine.run(_read(testdata, "normal_in.go")).code
  again = engine.run(once)

  assert again.outcome == PatchOutcome.ALREADY_CHECKING


def test_output_roundtrips(engine, testdata):
  output = engine.run(_read(testdata, "normal_in.go")).code
  assert engine.to_source(engine.parse(output)) == output


def test_structural_error(engine):
  result = engine.run("package main\n\nfunc main() {\n\tflag.Parse(\n", "broken.go")

  assert result.outcome == PatchOutcome.STRUCTURAL_ERROR
  assert not result.success
  assert result.errors[0].startswith("Failed to parse broken.go:")

  with pytest.raises(StructuralError):
    engine.patch("package main\n\nfunc main() {\n", "broken.go")


def test_missing_package_clause_is_structural_error(engine):
  result = engine.run("func main() {\n\tflag.Parse()\n}\n", "nopkg.go")

  assert result.outcome == PatchOutcome.STRUCTURAL_ERROR
  assert result.errors == ["Failed to parse nopkg.go:1:1: expected 'package' clause"]


def test_top_level_statement_is_structural_error(engine):
  code = "package main\n\nx := 1\n\nfunc main() {\n\tflag.Parse()\n}\n"
  assert engine.run(code).outcome == PatchOutcome.STRUCTURAL_ERROR


def test_deeply_nested_expression(engine):
  code = "package main\n\nvar s = " + " + ".join(['"x"'] * 3000) + "\n\nfunc main() {\n\tflag.Parse()\n}\n"
  result = engine.run(code)

  assert result.outcome == PatchOutcome.REWRITTEN
  assert "\tflag.Parse()\n\tif flag.NArg() != 0 {" in result.code
  assert engine.to_source(engine.parse(result.code)) == result.code


def test_crlf_fixture(engine, testdata):
  code = _read(testdata, "normal_in.go").replace("\n", "\r\n")
  result = engine.run(code)

  assert result.outcome == PatchOutcome.REWRITTEN
  assert result.code == _read(testdata, "normal_out.go").replace("\n", "\r\n")


def test_crlf_one_line_function(engine):
  code = 'package main\r\n\r\nimport (\r\n\t"flag"\r\n\t"log"\r\n)\r\n\r\nfunc main() { flag.Parse() }\r\n'
  result = engine.run(code)

  assert result.code == (
    'package main\r\n\r\nimport (\r\n\t"flag"\r\n\t"log"\r\n)\r\n\r\n'
    "func main() {\r\n"
    "\tflag.Parse()\r\n"
    "\tif flag.NArg() != 0 {\r\n"
    '\t\tlog.Fatalf("Trailing args not expected: %q", flag.Args())\r\n'
    "\t}\r\n"
    "}\r\n"
  )


def test_aliased_import_is_reported(engine):
  code = 'package main\n\nimport (\n\t"flag"\n\tgolog "log"\n)\n\nfunc main() {\n\tflag.Parse()\n\tgolog.Print()\n}\n'
  result = engine.run(code)

  assert result.outcome == PatchOutcome.REWRITTEN
  assert 'import (\n\t"flag"\n\tgolog "log"\n\t"log"\n)' in result.code
  warnings = [e["description"] for e in result.trace_events if e["type"] == TraceEventType.ANALYSIS_WARNING]
  assert warnings == ["'log' is imported under another name; adding a plain import"]


def test_insert_point_not_found_is_failure(engine):
  code = "package main\n\nimport \"flag\"\n\nfunc init() {\n\tflag.Parse()\n}\n\nfunc main() {}\n"
  result = engine.run(code)

  assert result.outcome == PatchOutcome.INSERT_POINT_NOT_FOUND
  assert not result.success
  assert result.code == ""

  with pytest.raises(InsertPointNotFound):
    engine.patch(code)


def test_detection_precedes_mutation(engine):
  # flag.NArg anywhere wins over a missing main.
  code = "package lib\n\nfunc Run() {\n\tflag.Parse()\n\t_ = flag.NArg()\n}\n"
  assert engine.run(code).outcome == PatchOutcome.ALREADY_CHECKING


def test_mentioned_args_counts_as_checking(engine):
  code = "package main\n\nvar rest = flag.Args\n\nfunc main() {\n\tflag.Parse()\n}\n"
  assert engine.run(code).outcome == PatchOutcome.ALREADY_CHECKING


def test_missing_imports_are_added(engine):
  code = "package main\n\nfunc main() {\n\tflag.Parse()\n}\n"
  result = engine.run(code)

  assert result.code == (
    "package main\n\n"
    'import (\n\t"flag"\n\t"log"\n)\n\n'
    "func main() {\n"
    "\tflag.Parse()\n"
    "\tif flag.NArg() != 0 {\n"
    '\t\tlog.Fatalf("Trailing args not expected: %q", flag.Args())\n'
    "\t}\n"
    "}\n"
  )


def test_configured_function_name(testdata):
  engine = PatchEngine(RuntimeConfig(function_name="Run"))
  result = engine.run(_read(testdata, "nomain_in.go"))

  assert result.changed
  assert "func Run() {\n\tflag.Parse()\n\tif flag.NArg() != 0 {" in result.code


def test_trace_events(engine, testdata):
  result = engine.run(_read(testdata, "normal_in.go"))
  types = [e["type"] for e in result.trace_events]
  phases = [e["description"] for e in result.trace_events if e["type"] == TraceEventType.PHASE_START]

  assert phases == ["Patch Pipeline", "Parsing", "Checking", "Locating", "Mutating", "Serializing"]
  assert types.count(TraceEventType.PHASE_START) == types.count(TraceEventType.PHASE_END)
  assert TraceEventType.AST_MUTATION in types
  imports = [e["metadata"]["path"] for e in result.trace_events if e["type"] == TraceEventType.IMPORT_ACTION]
  assert imports == ["log"]


def test_trace_closes_phases_on_noop(engine, testdata):
  result = engine.run(_read(testdata, "noparse_in.go"))
  types = [e["type"] for e in result.trace_events]

  assert TraceEventType.INSPECTION in types
  assert types.count(TraceEventType.PHASE_START) == types.count(TraceEventType.PHASE_END)


def test_check_helper(testdata):
  assert argtail.check(_read(testdata, "normal_in.go")) == PatchOutcome.REWRITTEN
  assert argtail.check(_read(testdata, "noparse_in.go")) == PatchOutcome.NO_PARSE_CALLS
