"""
Go Syntax Tree Nodes.

Defines the mutable, lossless tree that the patcher works on. The tree mirrors
the tree-sitter Go grammar: every node carries the grammar `kind` (e.g.
``call_expression``) and, when it fills a named slot of its parent, the grammar
field name (e.g. ``function``, ``arguments``).

Leaves hold the token text plus the raw source found between the previous token
and this one (``prefix``: whitespace and line breaks). Printing a tree is the
concatenation of ``prefix + text`` over all leaves, so an unmodified tree prints
back to the exact input.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional


class NodeKind:
  """Grammar kinds the patcher inspects or builds."""

  SOURCE_FILE = "source_file"
  PACKAGE_CLAUSE = "package_clause"
  IMPORT_DECLARATION = "import_declaration"
  IMPORT_SPEC_LIST = "import_spec_list"
  IMPORT_SPEC = "import_spec"
  FUNCTION_DECLARATION = "function_declaration"
  BLOCK = "block"
  STATEMENT_LIST = "statement_list"
  EXPRESSION_STATEMENT = "expression_statement"
  IF_STATEMENT = "if_statement"
  BINARY_EXPRESSION = "binary_expression"
  CALL_EXPRESSION = "call_expression"
  ARGUMENT_LIST = "argument_list"
  SELECTOR_EXPRESSION = "selector_expression"
  QUALIFIED_TYPE = "qualified_type"
  IDENTIFIER = "identifier"
  FIELD_IDENTIFIER = "field_identifier"
  PACKAGE_IDENTIFIER = "package_identifier"
  TYPE_IDENTIFIER = "type_identifier"
  INT_LITERAL = "int_literal"
  INTERPRETED_STRING_LITERAL = "interpreted_string_literal"
  RAW_STRING_LITERAL = "raw_string_literal"
  COMMENT = "comment"


# Kinds kept as single tokens even though tree-sitter splits them further.
ATOMIC_KINDS = frozenset(
  {
    NodeKind.INTERPRETED_STRING_LITERAL,
    NodeKind.RAW_STRING_LITERAL,
    "rune_literal",
    NodeKind.COMMENT,
  }
)

# Newline tokens the grammar emits as implicit statement terminators. They are
# stored with empty text so that every line break lives in a leaf prefix.
LINE_TERMINATOR = "\n"


@dataclass(eq=False)
class GoNode:
  """
  A node of the Go syntax tree.

  Attributes:
      kind (str): The grammar kind (``identifier``, ``block``, ``"("`` ...).
      children (List[GoNode]): Ordered child nodes. Empty for leaves.
      text (Optional[str]): Token text. Set only on leaves.
      prefix (str): Raw source between the previous token and this leaf.
      field_name (Optional[str]): Grammar field this node fills in its parent.
      named (bool): False for anonymous tokens (punctuation, keywords).
  """

  kind: str
  children: List["GoNode"] = field(default_factory=list)
  text: Optional[str] = None
  prefix: str = ""
  field_name: Optional[str] = None
  named: bool = True

  @property
  def is_leaf(self) -> bool:
    return self.text is not None

  @property
  def named_children(self) -> List["GoNode"]:
    return [c for c in self.children if c.named]

  def child_by_field(self, name: str) -> Optional["GoNode"]:
    """
    Returns the first child filling the grammar field `name`.

    Args:
        name (str): Field name (e.g. ``operand``).

    Returns:
        Optional[GoNode]: The child, or None if the field is empty.
    """
    for child in self.children:
      if child.field_name == name:
        return child
    return None

  def index_of(self, child: "GoNode") -> int:
    """
    Position of `child` among this node's children, compared by identity.

    Raises:
        ValueError: If `child` is not a direct child.
    """
    for i, node in enumerate(self.children):
      if node is child:
        return i
    raise ValueError(f"{child!r} is not a child of {self!r}")

  def is_line_trailer(self) -> bool:
    """True for a ``;`` or comment that ends the line of the previous token."""
    return self.kind in (";", NodeKind.COMMENT) and not self.starts_line()

  def leaves(self) -> Iterator["GoNode"]:
    """Yields the leaf tokens of this subtree in source order."""
    return (node for node in self.walk() if node.is_leaf)

  def walk(self) -> Iterator["GoNode"]:
    """Yields every node of this subtree in pre-order."""
    stack = [self]
    while stack:
      node = stack.pop()
      yield node
      stack.extend(reversed(node.children))

  def visit(self, visitor: Any) -> "GoNode":
    """
    Runs a `GoVisitor` over this subtree.

    Args:
        visitor: The visitor instance.

    Returns:
        GoNode: This node, for chaining.
    """
    visitor.traverse(self)
    return self

  def first_leaf(self) -> Optional["GoNode"]:
    return next(self.leaves(), None)

  def last_leaf(self) -> Optional["GoNode"]:
    last = None
    for leaf in self.leaves():
      last = leaf
    return last

  @property
  def code(self) -> str:
    """Source text of the subtree, including the prefix of its first token."""
    return "".join(leaf.prefix + leaf.text for leaf in self.leaves())

  @property
  def source(self) -> str:
    """Source text of the subtree without the leading prefix."""
    leaf = self.first_leaf()
    if leaf is None:
      return ""
    return self.code[len(leaf.prefix) :]

  def line_indent(self) -> Optional[str]:
    """
    Returns the indentation of the line this node starts on.

    Returns:
        Optional[str]: The whitespace after the last line break before the
        node, or None when the node shares its line with a previous token.
    """
    leaf = self.first_leaf()
    if leaf is None or "\n" not in leaf.prefix:
      return None
    return leaf.prefix.rsplit("\n", 1)[1]

  def starts_line(self) -> bool:
    """True if a line break precedes this node."""
    leaf = self.first_leaf()
    if leaf is None:
      return False
    return "\n" in leaf.prefix

  def __repr__(self) -> str:
    if self.is_leaf:
      return f"GoNode({self.kind!r}, text={self.text!r})"
    return f"GoNode({self.kind!r}, children={len(self.children)})"


@dataclass(eq=False, repr=False)
class SourceFile(GoNode):
  """
  Root of a parsed Go file.

  Attributes:
      filename (str): Name used in diagnostics.
      trailer (str): Raw text after the last token (usually the final newline).
      newline (str): Line break used by the file (``"\\n"`` or ``"\\r\\n"``);
          synthesized code uses the same one.
  """

  kind: str = NodeKind.SOURCE_FILE
  filename: str = "<input>"
  trailer: str = ""
  newline: str = "\n"

  @property
  def code(self) -> str:
    return super().code + self.trailer

  def top_level(self, kind: str) -> List[GoNode]:
    """Returns the direct children of the file with grammar kind `kind`."""
    return [c for c in self.children if c.kind == kind]
