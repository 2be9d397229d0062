"""
Go Source Emitter.

Serializes a `GoNode` tree back into Go source text. Output is the
concatenation of every leaf's prefix and text, followed by the file trailer, so
it is deterministic and stable: emitting, re-parsing and emitting again yields
identical text.
"""

from argtail.core.golang.nodes import GoNode


class GoEmitter:
  """
  Converts syntax trees to source strings.
  """

  def emit(self, node: GoNode) -> str:
    """
    Emits the source of a tree or subtree.

    Args:
        node: The root to print. A `SourceFile` includes its trailer.

    Returns:
        str: Go source text.
    """
    return node.code
