"""
Tests for synthesized nodes.

Built subtrees must print as gofmt would and look exactly like parsed code to
the scanners (same kinds, same field names).
"""

from argtail.core.golang import GoNode, NodeKind
from argtail.core.golang.builders import (
  go_quote,
  leaf_needing_break,
  make_call,
  make_guard,
  make_import_declaration,
  make_import_spec_list,
  make_import_spec,
  make_string,
)
from argtail.core.scanners import contains_call, get_qualified_name
from argtail.core.symbols import FLAG_ARGS, LOG_FATALF


def test_go_quote_escapes():
  assert go_quote("plain") == '"plain"'
  assert go_quote('say "hi"\n') == '"say \\"hi\\"\\n"'
  assert go_quote("a\\b\tc") == '"a\\\\b\\tc"'


def test_make_call_layout():
  call = make_call(LOG_FATALF, [make_string("x: %v"), make_call(FLAG_ARGS)])

  assert call.code == 'log.Fatalf("x: %v", flag.Args())'
  assert call.kind == NodeKind.CALL_EXPRESSION
  assert get_qualified_name(call.child_by_field("function")) == ("log", "Fatalf")


def test_guard_layout():
  guard = make_guard("\t")

  assert guard.code == (
    '\n\tif flag.NArg() != 0 {\n\t\tlog.Fatalf("Trailing args not expected: %q", flag.Args())\n\t}'
  )
  assert guard.kind == NodeKind.IF_STATEMENT
  assert guard.child_by_field("condition").kind == NodeKind.BINARY_EXPRESSION
  assert guard.child_by_field("consequence").kind == NodeKind.BLOCK


def test_guard_is_visible_to_scanners():
  guard = make_guard("")

  assert contains_call(guard, "flag", "NArg")
  assert contains_call(guard, "flag", "Args")
  assert contains_call(guard, "log", "Fatalf")
  assert not contains_call(guard, "flag", "Parse")


def test_guard_matches_parsed_equivalent(parse):
  tree = parse(
    "package main\n\nfunc main() {\n"
    '\tif flag.NArg() != 0 {\n\t\tlog.Fatalf("Trailing args not expected: %q", flag.Args())\n\t}\n}\n'
  )
  parsed = next(n for n in tree.walk() if n.kind == NodeKind.IF_STATEMENT)

  def named_kinds(node):
    return [n.kind for n in node.walk() if n.named and n.kind != NodeKind.STATEMENT_LIST]

  assert named_kinds(make_guard("\t")) == named_kinds(parsed)
  assert make_guard("\t").source == parsed.source


def test_guard_uses_given_newline():
  guard = make_guard("\t", "\r\n")

  assert guard.code == (
    '\r\n\tif flag.NArg() != 0 {\r\n\t\tlog.Fatalf("Trailing args not expected: %q", flag.Args())\r\n\t}'
  )


def test_import_declaration_layout():
  decl = make_import_declaration(["flag", "log"])
  assert decl.code == '\n\nimport (\n\t"flag"\n\t"log"\n)'

  decl = make_import_declaration(["flag"], prefix="\r\n\r\n", newline="\r\n")
  assert decl.code == '\r\n\r\nimport (\r\n\t"flag"\r\n)'


def test_import_spec_list_reprefixes_first_node_of_each_line():
  comment = GoNode(kind=NodeKind.COMMENT, text="/* keep */", prefix=" ")
  lines = [[make_import_spec("a", prefix=" ")], [comment, make_import_spec("b", prefix=" ")]]
  assert make_import_spec_list(lines).code == ' (\n\t"a"\n\t/* keep */ "b"\n)'


def test_leaf_needing_break(parse):
  tree = parse("package main\n\nfunc main() { flag.Parse() }\n")
  stmt = next(n for n in tree.walk() if n.kind == NodeKind.EXPRESSION_STATEMENT)
  assert leaf_needing_break(tree, stmt).text == "}"

  tree = parse("package main\n\nfunc main() {\n\tflag.Parse()\n}\n")
  stmt = next(n for n in tree.walk() if n.kind == NodeKind.EXPRESSION_STATEMENT)
  assert leaf_needing_break(tree, stmt) is None
