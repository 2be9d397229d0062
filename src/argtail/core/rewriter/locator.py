"""
Function Locator.

Finds a top-level function declaration by name and exposes its body as a
`FunctionBody` handle whose statement sequence can be mutated in place.
Methods and function literals nested in other declarations are not candidates.
"""

from dataclasses import dataclass
from typing import List, Optional

from argtail.core.errors import FunctionNotFound
from argtail.core.golang.nodes import GoNode, NodeKind, SourceFile


@dataclass
class FunctionBody:
  """
  Mutable handle on a function's body.

  Attributes:
      name (str): The function name.
      declaration (GoNode): The ``function_declaration`` node.
      block (Optional[GoNode]): The body ``block``; None for declarations
          without a body (e.g. implemented in assembly).
      newline (str): Line break of the file, used for inserted lines.
  """

  name: str
  declaration: GoNode
  block: Optional[GoNode]
  newline: str = "\n"

  @property
  def container(self) -> Optional[GoNode]:
    """
    The node whose children hold the statements.

    Newer grammars wrap statements in a ``statement_list`` inside the block;
    older ones put them directly in the block.
    """
    if self.block is None:
      return None
    for child in self.block.children:
      if child.kind == NodeKind.STATEMENT_LIST:
        return child
    return self.block

  @property
  def statements(self) -> List[GoNode]:
    """The statement sequence, excluding comments and separators."""
    container = self.container
    if container is None:
      return []
    return [c for c in container.children if c.named and c.kind != NodeKind.COMMENT]


def find_function(tree: SourceFile, name: str) -> FunctionBody:
  """
  Locates the first top-level function called `name`.

  Args:
      tree: The parsed file.
      name: Function identifier, e.g. ``main``.

  Returns:
      FunctionBody: Handle on the function body.

  Raises:
      FunctionNotFound: If no top-level function has that name.
  """
  for decl in tree.top_level(NodeKind.FUNCTION_DECLARATION):
    ident = decl.child_by_field("name")
    if ident is not None and ident.text == name:
      return FunctionBody(name=name, declaration=decl, block=decl.child_by_field("body"), newline=tree.newline)
  raise FunctionNotFound(name)
