"""
Go Parser Implementation.

This module provides the `GoParser`, which parses Go source with the
tree-sitter Go grammar and converts the resulting concrete syntax tree into the
mutable `GoNode` tree defined in `nodes.py`.

Capabilities:
- Lossless conversion: whitespace between tokens is kept as leaf prefixes.
- String, rune and comment tokens are kept atomic.
- Syntax errors (``ERROR`` / ``MISSING`` nodes) are reported as
  `StructuralError` with the position of the first offending node.
- The grammar is more lenient than the Go compiler at file level; a file must
  open with a package clause and hold only declarations at top level.
- Conversion uses an explicit stack, so deeply nested expressions (long
  generated concatenations) do not hit the interpreter's recursion limit.
"""

import logging
from typing import List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from argtail.core.errors import StructuralError
from argtail.core.golang.nodes import ATOMIC_KINDS, LINE_TERMINATOR, GoNode, NodeKind, SourceFile

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Named kinds allowed as direct children of a source file.
TOP_LEVEL_KINDS = frozenset(
  {
    NodeKind.PACKAGE_CLAUSE,
    NodeKind.IMPORT_DECLARATION,
    NodeKind.FUNCTION_DECLARATION,
    "method_declaration",
    "type_declaration",
    "const_declaration",
    "var_declaration",
    NodeKind.COMMENT,
  }
)


def detect_newline(code: str) -> str:
  """Returns ``"\\r\\n"`` if the first line break of `code` is CRLF, else ``"\\n"``."""
  first = code.find("\n")
  if first > 0 and code[first - 1] == "\r":
    return "\r\n"
  return "\n"


class GoParser:
  """
  Parses Go source text into a `SourceFile` tree.
  """

  def __init__(self) -> None:
    self._parser = Parser(GO_LANGUAGE)

  def parse(self, code: str, filename: str = "<input>") -> SourceFile:
    """
    Parses a complete Go file.

    Args:
        code: The Go source text.
        filename: Name used in diagnostics.

    Returns:
        SourceFile: The root of the mutable syntax tree.

    Raises:
        StructuralError: If the text is not a well-formed Go file.
    """
    data = code.encode("utf-8")
    tree = self._parser.parse(data)
    root = tree.root_node

    if root.has_error:
      raise _structural_error(root, data, filename)
    _check_top_level(root, filename)

    builder = _TreeBuilder(data)
    source_file = SourceFile(filename=filename, newline=detect_newline(code))
    source_file.children = builder.build(root)
    source_file.trailer = data[builder.offset :].decode("utf-8")
    logger.debug("Parsed %s: %d top-level nodes", filename, len(source_file.children))
    return source_file


def _children_with_fields(ts_node: Node) -> List[Tuple[Node, Optional[str]]]:
  children = []
  cursor = ts_node.walk()
  if not cursor.goto_first_child():
    return children
  while True:
    children.append((cursor.node, cursor.field_name))
    if not cursor.goto_next_sibling():
      break
  return children


class _TreeBuilder:
  """
  Converts tree-sitter nodes to `GoNode`s, tracking the end of the last token
  so that every byte of input lands in exactly one leaf prefix or text.
  """

  def __init__(self, data: bytes) -> None:
    self.data = data
    self.offset = 0

  def build(self, root: Node) -> List[GoNode]:
    """
    Converts the children of `root` in source order.

    Returns:
        List[GoNode]: The converted top-level nodes.
    """
    top: List[GoNode] = []
    stack = [(child, name, top) for child, name in reversed(_children_with_fields(root))]
    while stack:
      ts_node, field_name, siblings = stack.pop()
      node = self.convert(ts_node, field_name)
      siblings.append(node)
      if not node.is_leaf:
        stack.extend((child, name, node.children) for child, name in reversed(_children_with_fields(ts_node)))
    return top

  def convert(self, ts_node: Node, field_name: Optional[str]) -> GoNode:
    """Converts one node. Branches are returned without children."""
    if ts_node.type == LINE_TERMINATOR and not ts_node.is_named:
      prefix = self.data[self.offset : ts_node.start_byte].decode("utf-8")
      self.offset = max(self.offset, ts_node.start_byte)
      return GoNode(kind=LINE_TERMINATOR, text="", prefix=prefix, field_name=field_name, named=False)

    if ts_node.child_count == 0 or ts_node.type in ATOMIC_KINDS:
      prefix = self.data[self.offset : ts_node.start_byte].decode("utf-8")
      text = self.data[ts_node.start_byte : ts_node.end_byte].decode("utf-8")
      self.offset = max(self.offset, ts_node.end_byte)
      return GoNode(
        kind=ts_node.type,
        text=text,
        prefix=prefix,
        field_name=field_name,
        named=ts_node.is_named,
      )

    return GoNode(kind=ts_node.type, field_name=field_name, named=ts_node.is_named)


def _check_top_level(root: Node, filename: str) -> None:
  """
  Rejects files the grammar accepts but the Go compiler does not.

  Raises:
      StructuralError: If the package clause is missing or a top-level node is
          not a declaration (e.g. a statement like ``x := 1``).
  """
  named = [c for c in root.children if c.is_named and c.type != NodeKind.COMMENT]
  if not named or named[0].type != NodeKind.PACKAGE_CLAUSE:
    at = named[0] if named else root
    line, column = at.start_point[0] + 1, at.start_point[1] + 1
    raise StructuralError(filename, "expected 'package' clause", line=line, column=column)

  for child in root.children:
    if child.is_named and child.type not in TOP_LEVEL_KINDS:
      line, column = child.start_point[0] + 1, child.start_point[1] + 1
      raise StructuralError(filename, f"non-declaration {child.type} outside function body", line=line, column=column)


def _first_error(root: Node) -> Node:
  """Finds the first ERROR or MISSING node in pre-order."""
  stack = [root]
  while stack:
    node = stack.pop()
    if node.is_error or node.is_missing:
      return node
    stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
  return root


def _structural_error(root: Node, data: bytes, filename: str) -> StructuralError:
  node = _first_error(root)
  line, column = node.start_point[0] + 1, node.start_point[1] + 1
  if node.is_missing:
    message = f"missing {node.type!r}"
  else:
    snippet = data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    snippet = snippet.splitlines()[0] if snippet.strip() else snippet
    message = f"syntax error near {snippet[:40]!r}"
  return StructuralError(filename, message, line=line, column=column)
