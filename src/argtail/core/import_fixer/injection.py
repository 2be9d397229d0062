"""
Import Injection.

Adds the import specs a patched file needs. Existing imports are never removed
or reordered; new specs go into the first import declaration:

1.  **Grouped** ``import ( ... )``: each new spec joins the first run of specs
    (runs are separated by blank lines) at the position gofmt's sorting gives
    it, i.e. after the last spec whose path sorts before it.
2.  **Single** ``import "x"``: the declaration becomes a group holding the
    original spec (with its comments) and the new ones.
3.  **No imports at all**: a new group is added after the package clause.

New lines use the line break of the file being patched.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from argtail.core.golang.builders import (
  leaf_needing_break,
  make_import_declaration,
  make_import_spec,
  make_import_spec_list,
  with_prefix,
)
from argtail.core.golang.nodes import GoNode, NodeKind, SourceFile
from argtail.core.import_fixer.base import ImportSet, spec_path
from argtail.core.symbols import REQUIRED_IMPORTS

logger = logging.getLogger(__name__)

_BLANK_LINE = re.compile(r"\n[ \t\r]*\n")


def ensure_imports(
  tree: SourceFile,
  required: Iterable[str] = REQUIRED_IMPORTS,
  imports: Optional[ImportSet] = None,
) -> ImportSet:
  """
  Adds import specs for every required path whose name is not bound yet.

  Args:
      tree: The file to update in place.
      required: Import paths the file must bind.
      imports: The current Import Set. Read from `tree` when omitted.

  Returns:
      ImportSet: The Import Set after augmentation. Running again with it is a
      no-op.
  """
  current = imports if imports is not None else ImportSet.from_tree(tree)
  missing = current.missing(required)
  if not missing:
    return current

  newline = tree.newline
  decls = tree.top_level(NodeKind.IMPORT_DECLARATION)
  if not decls:
    _add_declaration(tree, missing)
  else:
    decl = decls[0]
    group = next((c for c in decl.children if c.kind == NodeKind.IMPORT_SPEC_LIST), None)
    if group is not None:
      for path in missing:
        _insert_into_group(group, path, newline)
    else:
      _convert_to_group(decl, missing, newline)

  logger.debug("Added imports %s to %s", missing, tree.filename)
  return current.with_imports(missing)


def _first_run(group: GoNode) -> List[GoNode]:
  """The leading specs of a group that are not separated by a blank line."""
  run: List[GoNode] = []
  gap = ""
  for child in group.children:
    if child.kind == NodeKind.IMPORT_SPEC:
      if run and _BLANK_LINE.search(gap + child.first_leaf().prefix):
        break
      run.append(child)
      gap = ""
    elif run:
      gap += child.code
  return run


def _insert_into_group(group: GoNode, path: str, newline: str) -> None:
  children = group.children
  run = _first_run(group)
  indent = (run[0].line_indent() if run else None) or "\t"
  spec = make_import_spec(path, f"{newline}{indent}")

  before = [s for s in run if spec_path(s) <= path]
  if before:
    position = group.index_of(before[-1]) + 1
    while position < len(children) and children[position].is_line_trailer():
      position += 1
  elif run:
    position = group.index_of(run[0])
  else:
    # Empty group: `import ()`.
    position = 1

  children.insert(position, spec)
  following = leaf_needing_break(group, spec)
  if following is not None:
    following.prefix = newline if following is children[-1] else f"{newline}{indent}"


def _line_path(line: Sequence[GoNode]) -> str:
  return next(spec_path(n) for n in line if n.kind == NodeKind.IMPORT_SPEC)


def _convert_to_group(decl: GoNode, paths: List[str], newline: str) -> None:
  keyword, *original = decl.children
  spec = next(c for c in original if c.kind == NodeKind.IMPORT_SPEC)
  # After a line comment the spec sits on its own line; keep it indented.
  if spec is not original[0] and spec.starts_line():
    with_prefix(spec, f"{newline}\t")

  lines = [original] + [[make_import_spec(p)] for p in paths]
  lines.sort(key=_line_path)
  decl.children = [keyword, make_import_spec_list(lines, newline=newline)]


def _add_declaration(tree: SourceFile, paths: List[str]) -> None:
  children = tree.children
  newline = tree.newline
  # The parser guarantees a package clause.
  clause = next(c for c in children if c.kind == NodeKind.PACKAGE_CLAUSE)
  position = tree.index_of(clause) + 1
  while position < len(children) and children[position].is_line_trailer():
    position += 1

  decl = make_import_declaration(sorted(paths), prefix=newline * 2, newline=newline)
  children.insert(position, decl)
  following = leaf_needing_break(tree, decl)
  if following is not None:
    following.prefix = newline * 2
