"""
Tests for qualified reference scanning.

Verifies:
1. Calls, bare references and qualified types all count as references.
2. Only plain-identifier operands match (no ``a.flag.Parse``).
3. Names are matched exactly, case included.
"""

import pytest

from argtail.core.scanners import contains_call, get_qualified_name
from argtail.core.symbols import FLAG_ARGS, FLAG_NARG


def _wrap(body: str) -> str:
  return f"package main\n\nfunc main() {{\n{body}\n}}\n"


@pytest.mark.parametrize(
  "body",
  [
    "\tflag.Parse()",
    "\tdefer flag.Parse()",
    "\tf := flag.Parse\n\tf()",
    "\tgo func() { flag.Parse() }()",
    "\tif true {\n\t\tflag.Parse()\n\t}",
  ],
)
def test_reference_found(parse, body):
  assert contains_call(parse(_wrap(body)), "flag", "Parse")


@pytest.mark.parametrize(
  "body",
  [
    "\tflag.ParseArgs()",
    "\tFlag.Parse()",
    "\tx.flag.Parse()",
    '\tprintln("flag.Parse()")',
    "\t// flag.Parse()",
    "\tParse()",
  ],
)
def test_reference_not_found(parse, body):
  assert not contains_call(parse(_wrap(body)), "flag", "Parse")


def test_reference_outside_main(parse):
  tree = parse("package main\n\nfunc init() {\n\tflag.Parse()\n}\n\nfunc main() {}\n")
  assert contains_call(tree, "flag", "Parse")


def test_qualified_type_counts(parse):
  tree = parse("package main\n\nvar fs *flag.FlagSet\n")
  assert contains_call(tree, "flag", "FlagSet")


def test_narg_is_not_args(parse):
  tree = parse(_wrap("\tn := flag.NArg()\n\t_ = n"))

  assert contains_call(tree, FLAG_NARG.module, FLAG_NARG.symbol)
  assert not contains_call(tree, FLAG_ARGS.module, FLAG_ARGS.symbol)


def test_get_qualified_name_rejects_other_nodes(parse):
  tree = parse(_wrap("\tf()"))
  assert all(get_qualified_name(n) is None for n in tree.walk())
