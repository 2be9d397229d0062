"""
Tests for the per-run TraceLogger.
"""

import json

from argtail.core.tracer import TraceEventType, TraceLogger
from argtail.enums import PatchOutcome


def test_nested_phases_link_parents():
  tracer = TraceLogger()
  outer = tracer.start_phase("Outer")
  inner = tracer.start_phase("Inner", "detail")
  tracer.log_inspection("flag.Parse", "present")
  tracer.end_all()

  events = tracer.export()
  assert events[1]["parent_id"] == outer
  assert events[1]["metadata"] == {"detail": "detail"}
  assert events[2]["type"] == TraceEventType.INSPECTION
  assert events[2]["parent_id"] == inner
  assert [e["type"] for e in events[3:]] == [TraceEventType.PHASE_END, TraceEventType.PHASE_END]


def test_end_phase_without_start_is_noop():
  tracer = TraceLogger()
  tracer.end_phase()
  assert tracer.export() == []


def test_loggers_are_independent():
  a, b = TraceLogger(), TraceLogger()
  a.log_import("log")
  a.log_warning("careful")

  assert len(a.export()) == 2
  assert b.export() == []


def test_export_is_json_serializable():
  tracer = TraceLogger()
  tracer.start_phase("Mutating")
  tracer.log_mutation("func main", "{}", "{ x }")
  tracer.end_phase()

  data = json.loads(json.dumps(tracer.export()))
  assert data[1]["type"] == "ast_mutation"
  assert data[1]["metadata"] == {"before": "{}", "after": "{ x }"}


def test_outcome_categories():
  assert [o for o in PatchOutcome if o.is_failure] == [
    PatchOutcome.STRUCTURAL_ERROR,
    PatchOutcome.INSERT_POINT_NOT_FOUND,
  ]
  assert not PatchOutcome.REWRITTEN.is_noop
  assert not PatchOutcome.REWRITTEN.is_failure
  assert PatchOutcome("already_checking") is PatchOutcome.ALREADY_CHECKING
