"""
Trailing-Arguments Guard Insertion.

Splices the guard::

    if flag.NArg() != 0 {
        log.Fatalf("Trailing args not expected: %q", flag.Args())
    }

into a function body, immediately after its first bare ``flag.Parse()``
statement. Statements before the insertion point are untouched and every later
statement keeps its relative order.

Layout follows gofmt: the guard takes the indentation of the ``flag.Parse()``
line. When the anchor statement or the token after the guard share a line with
other code (``func main() { flag.Parse() }``), they are moved onto their own
lines so the result stays valid Go.
"""

import logging
from typing import List

from argtail.core.errors import InsertPointNotFound
from argtail.core.golang.builders import leaf_needing_break, make_guard, with_prefix
from argtail.core.golang.nodes import GoNode, NodeKind
from argtail.core.rewriter.locator import FunctionBody
from argtail.core.scanners import get_qualified_name
from argtail.core.symbols import FLAG_PARSE, QualifiedCall

logger = logging.getLogger(__name__)


def is_call_statement(stmt: GoNode, ref: QualifiedCall) -> bool:
  """
  Checks whether `stmt` is a bare expression statement calling `ref`.

  Args:
      stmt: A statement node.
      ref: The expected callee.

  Returns:
      bool: True for ``ref.module.ref.symbol(...)`` used as a statement.
  """
  if stmt.kind != NodeKind.EXPRESSION_STATEMENT:
    return False
  exprs = [c for c in stmt.named_children if c.kind != NodeKind.COMMENT]
  if len(exprs) != 1 or exprs[0].kind != NodeKind.CALL_EXPRESSION:
    return False
  callee = exprs[0].child_by_field("function")
  return callee is not None and get_qualified_name(callee) == (ref.module, ref.symbol)


def find_insert_index(statements: List[GoNode], anchor: QualifiedCall = FLAG_PARSE) -> int:
  """
  Computes the statement index right after the first call to `anchor`.

  Args:
      statements: The statement sequence of a function body.
      anchor: The call the guard must follow.

  Returns:
      int: The insertion index, or -1 if no statement calls `anchor`.
  """
  for i, stmt in enumerate(statements):
    if is_call_statement(stmt, anchor):
      return i + 1
  return -1


def insert_guard(body: FunctionBody) -> None:
  """
  Inserts the guard after the first ``flag.Parse()`` statement of `body`.

  Args:
      body: Handle on the target function. Mutated in place.

  Raises:
      InsertPointNotFound: If the body has no bare ``flag.Parse()`` statement.
  """
  statements = body.statements
  index = find_insert_index(statements)
  container = body.container
  if index < 0 or container is None:
    raise InsertPointNotFound(body.name)

  anchor = statements[index - 1]
  newline = body.newline
  base_indent = body.declaration.line_indent() or ""
  indent = anchor.line_indent()
  if indent is None:
    indent = base_indent + "\t"
    with_prefix(anchor, f"{newline}{indent}")

  children = container.children
  position = container.index_of(anchor) + 1
  while position < len(children) and children[position].is_line_trailer():
    position += 1

  guard = make_guard(indent, newline)
  children.insert(position, guard)
  _break_line_after(body, guard, indent, base_indent)
  logger.debug("Inserted guard into %s() at statement %d", body.name, index)


def _break_line_after(body: FunctionBody, guard: GoNode, indent: str, base_indent: str) -> None:
  """Ensures the token following `guard` starts a new line."""
  following = leaf_needing_break(body.block, guard)
  if following is None:
    return
  closing = body.block.children[-1]
  following.prefix = body.newline + (base_indent if following is closing else indent)
