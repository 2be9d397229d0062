"""
Syntax Scanners for Qualified Reference Detection.

This module provides visitors that answer existence questions about a parsed
Go file. They drive the patcher's decisions:

1.  If no ``flag.Parse`` reference exists, the program parses no flags and there
    is nothing to guard.
2.  If a ``flag.Args`` or ``flag.NArg`` reference exists, the program already
    looks at its leftover arguments and must not be patched again.

Matching is purely syntactic: a reference is a selector whose operand is a plain
identifier, whether it is called, assigned or merely mentioned.
"""

from typing import Optional, Tuple

from argtail.core.golang.nodes import GoNode, NodeKind
from argtail.core.golang.visitor import GoVisitor
from argtail.core.symbols import QualifiedCall


def get_qualified_name(node: GoNode) -> Optional[Tuple[str, str]]:
  """
  Splits a ``pkg.Member`` reference into its two identifiers.

  Args:
      node: A ``selector_expression`` or ``qualified_type`` node.

  Returns:
      Optional[Tuple[str, str]]: ``(operand, member)`` when the operand is a plain
      identifier, otherwise None (e.g. ``a.b.C`` or ``f().X``).

  Example:
      >>> get_qualified_name(make_selector(QualifiedCall("flag", "Parse")))
      ('flag', 'Parse')
  """
  if node.kind == NodeKind.SELECTOR_EXPRESSION:
    operand, member = node.child_by_field("operand"), node.child_by_field("field")
  elif node.kind == NodeKind.QUALIFIED_TYPE:
    operand, member = node.child_by_field("package"), node.child_by_field("name")
  else:
    return None

  if operand is None or member is None or not operand.is_leaf:
    return None
  if operand.kind not in (NodeKind.IDENTIFIER, NodeKind.PACKAGE_IDENTIFIER):
    return None
  return operand.text, member.source


class QualifiedCallScanner(GoVisitor):
  """
  Scans for any reference to ``module.symbol``.

  Attributes:
      target (QualifiedCall): The reference to look for.
      found (bool): Set as soon as a match is seen.
  """

  def __init__(self, target: QualifiedCall) -> None:
    self.target = target
    self.found = False

  def visit_selector_expression(self, node: GoNode) -> None:
    self._check(node)

  def visit_qualified_type(self, node: GoNode) -> None:
    self._check(node)

  def _check(self, node: GoNode) -> None:
    if get_qualified_name(node) == (self.target.module, self.target.symbol):
      self.found = True

  def should_traverse(self, _node: GoNode) -> bool:
    """Stops the walk once a match has been recorded."""
    return not self.found


def contains_call(tree: GoNode, module: str, symbol: str) -> bool:
  """
  Checks whether ``module.symbol`` is referenced anywhere in `tree`.

  Args:
      tree: The tree (or subtree) to search.
      module: Package identifier, e.g. ``flag``.
      symbol: Member name, e.g. ``Parse``.

  Returns:
      bool: True if at least one reference exists.
  """
  scanner = QualifiedCallScanner(QualifiedCall(module, symbol))
  tree.visit(scanner)
  return scanner.found
