"""
Kind-Dispatching Tree Visitor.

`GoVisitor` walks a `GoNode` tree in pre-order and dispatches on the grammar
kind of each node: a subclass defines ``visit_<kind>`` (and optionally
``leave_<kind>``) for the kinds it is interested in, e.g. ``visit_selector_expression``.

A ``visit_`` method returning False skips the children of that node;
`should_traverse` returning False stops descending anywhere, which scanners use
to terminate early once they have their answer.

The walk keeps its own stack, so tree depth is not bounded by the interpreter's
recursion limit.
"""

from typing import Callable, List, Optional, Tuple

from argtail.core.golang.nodes import GoNode


class GoVisitor:
  """Base class for read-only and in-place mutating passes over a tree."""

  def should_traverse(self, node: GoNode) -> bool:
    """
    Hook evaluated before each node.

    Args:
        node: The node about to be visited.

    Returns:
        bool: False to skip `node` and its subtree.
    """
    return True

  def traverse(self, node: GoNode) -> None:
    # (node, leaving): leave hooks run once all children have been processed.
    stack: List[Tuple[GoNode, bool]] = [(node, False)]
    while stack:
      current, leaving = stack.pop()
      if leaving:
        leave = getattr(self, f"leave_{current.kind}", None)
        if leave:
          leave(current)
        continue

      if not self.should_traverse(current):
        continue

      visit: Optional[Callable[[GoNode], Optional[bool]]] = getattr(self, f"visit_{current.kind}", None)
      descend = visit(current) if visit else None

      stack.append((current, True))
      if descend is not False:
        stack.extend((child, False) for child in reversed(list(current.children)))
