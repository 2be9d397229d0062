"""
Node Builders.

Factory helpers that synthesize new `GoNode` subtrees using the same kinds and
field names the tree-sitter grammar produces, so that built code is
indistinguishable from parsed code to the scanners. Layout (line breaks and
tab indentation) is baked into leaf prefixes following gofmt conventions.
"""

from typing import Iterable, List, Optional, Sequence

from argtail.core.golang.nodes import GoNode, NodeKind
from argtail.core.symbols import FLAG_ARGS, FLAG_NARG, GUARD_MESSAGE, LOG_FATALF, QualifiedCall


def token(text: str, prefix: str = "", field_name: Optional[str] = None) -> GoNode:
  """Builds an anonymous token (keyword or punctuation)."""
  return GoNode(kind=text, text=text, prefix=prefix, field_name=field_name, named=False)


def named_leaf(kind: str, text: str, prefix: str = "", field_name: Optional[str] = None) -> GoNode:
  return GoNode(kind=kind, text=text, prefix=prefix, field_name=field_name)


def branch(kind: str, children: List[GoNode], field_name: Optional[str] = None) -> GoNode:
  return GoNode(kind=kind, children=children, field_name=field_name)


def with_prefix(node: GoNode, prefix: str) -> GoNode:
  """Sets the prefix of the first token of `node` and returns the node."""
  leaf = node.first_leaf()
  if leaf is not None:
    leaf.prefix = prefix
  return node


def leaf_needing_break(scope: GoNode, node: GoNode) -> Optional[GoNode]:
  """
  Finds the token after `node` if it shares the line `node` ends on.

  Args:
      scope: An ancestor of `node` bounding the search.
      node: A (possibly freshly inserted) subtree.

  Returns:
      Optional[GoNode]: The following leaf when no line break separates it from
      `node`, otherwise None.
  """
  last = node.last_leaf()
  leaves = iter(scope.leaves())
  for leaf in leaves:
    if leaf is last:
      break
  for following in leaves:
    if "\n" in following.prefix:
      return None
    # Implicit terminators are zero-width; the break belongs to the next token.
    if following.text:
      return following
  return None


def go_quote(value: str) -> str:
  """
  Renders a Go interpreted string literal.

  Args:
      value: The raw string.

  Returns:
      str: The quoted literal, e.g. ``"a\\tb"``.
  """
  escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
  return f'"{escaped}"'


def make_string(value: str, prefix: str = "") -> GoNode:
  return named_leaf(NodeKind.INTERPRETED_STRING_LITERAL, go_quote(value), prefix)


def make_selector(ref: QualifiedCall, prefix: str = "", field_name: Optional[str] = None) -> GoNode:
  """
  Builds ``module.symbol`` as a selector expression.

  Args:
      ref: The qualified reference.
      prefix: Layout before the module identifier.
      field_name: Grammar field in the parent.

  Returns:
      GoNode: A ``selector_expression`` node.
  """
  return branch(
    NodeKind.SELECTOR_EXPRESSION,
    [
      named_leaf(NodeKind.IDENTIFIER, ref.module, prefix, field_name="operand"),
      token("."),
      named_leaf(NodeKind.FIELD_IDENTIFIER, ref.symbol, field_name="field"),
    ],
    field_name=field_name,
  )


def make_call(
  ref: QualifiedCall,
  args: Sequence[GoNode] = (),
  prefix: str = "",
  field_name: Optional[str] = None,
) -> GoNode:
  """
  Builds ``module.symbol(args...)`` with gofmt argument spacing.

  Args:
      ref: The function to call.
      args: Argument expressions. Their leading prefixes are overwritten.
      prefix: Layout before the call.
      field_name: Grammar field in the parent.

  Returns:
      GoNode: A ``call_expression`` node.
  """
  arg_nodes: List[GoNode] = [token("(")]
  for i, arg in enumerate(args):
    if i > 0:
      arg_nodes.append(token(","))
    arg_nodes.append(with_prefix(arg, " " if i > 0 else ""))
  arg_nodes.append(token(")"))

  return branch(
    NodeKind.CALL_EXPRESSION,
    [
      make_selector(ref, prefix, field_name="function"),
      branch(NodeKind.ARGUMENT_LIST, arg_nodes, field_name="arguments"),
    ],
    field_name=field_name,
  )


def make_guard(indent: str, newline: str = "\n") -> GoNode:
  """
  Builds the trailing-arguments guard::

      if flag.NArg() != 0 {
          log.Fatalf("Trailing args not expected: %q", flag.Args())
      }

  Args:
      indent: Indentation of the statement line. The statement starts on a
          new line; the body is indented one more tab.
      newline: Line break of the surrounding file.

  Returns:
      GoNode: An ``if_statement`` node.
  """
  condition = branch(
    NodeKind.BINARY_EXPRESSION,
    [
      make_call(FLAG_NARG, prefix=" ", field_name="left"),
      token("!=", " ", field_name="operator"),
      named_leaf(NodeKind.INT_LITERAL, "0", " ", field_name="right"),
    ],
    field_name="condition",
  )
  fatal = branch(
    NodeKind.EXPRESSION_STATEMENT,
    [make_call(LOG_FATALF, [make_string(GUARD_MESSAGE), make_call(FLAG_ARGS)], prefix=f"{newline}{indent}\t")],
  )
  body = branch(
    NodeKind.BLOCK,
    [
      token("{", " "),
      branch(NodeKind.STATEMENT_LIST, [fatal]),
      token("}", f"{newline}{indent}"),
    ],
    field_name="consequence",
  )
  return branch(NodeKind.IF_STATEMENT, [token("if", f"{newline}{indent}"), condition, body])


def make_import_spec(path: str, prefix: str = "") -> GoNode:
  path_node = named_leaf(NodeKind.INTERPRETED_STRING_LITERAL, go_quote(path), prefix, field_name="path")
  return branch(NodeKind.IMPORT_SPEC, [path_node])


def make_import_spec_list(
  lines: Iterable[Sequence[GoNode]],
  indent: str = "\t",
  newline: str = "\n",
) -> GoNode:
  """
  Builds a parenthesized import group.

  Args:
      lines: One entry per output line: an ``import_spec`` together with the
          comments that belong to it, in output order. The first node of each
          line is moved onto a new indented line; the others keep their prefix.
      indent: Indentation for each spec line.
      newline: Line break of the surrounding file.

  Returns:
      GoNode: An ``import_spec_list`` node.
  """
  children = [token("(", " ")]
  for line in lines:
    first, *rest = line
    children.append(with_prefix(first, f"{newline}{indent}"))
    children.extend(rest)
  children.append(token(")", newline))
  return branch(NodeKind.IMPORT_SPEC_LIST, children)


def make_import_declaration(paths: Iterable[str], prefix: str = "\n\n", newline: str = "\n") -> GoNode:
  """
  Builds a grouped ``import ( ... )`` declaration for `paths`.

  Args:
      paths: Import paths in output order.
      prefix: Layout before the ``import`` keyword.
      newline: Line break of the surrounding file.

  Returns:
      GoNode: An ``import_declaration`` node.
  """
  lines = [[make_import_spec(p)] for p in paths]
  return branch(
    NodeKind.IMPORT_DECLARATION,
    [token("import", prefix), make_import_spec_list(lines, newline=newline)],
  )
