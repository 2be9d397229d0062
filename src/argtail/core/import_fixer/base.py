"""
Base Import Tracking.

Defines `ImportSet`, the value describing which package names a Go file binds
through its import declarations, and the helpers used to read import specs
from the tree.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List

from argtail.core.golang.nodes import GoNode, NodeKind, SourceFile


def unquote_path(literal: str) -> str:
  """Strips the quotes (or backquotes) around an import path literal."""
  if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
    return literal[1:-1]
  return literal


def default_name(import_path: str) -> str:
  """
  Returns the name an unaliased import binds: the last path element.

  Args:
      import_path: e.g. ``github.com/spf13/pflag``.

  Returns:
      str: e.g. ``pflag``.
  """
  trimmed = import_path.rstrip("/")
  if not trimmed:
    return import_path
  return trimmed.rsplit("/", 1)[-1]


def spec_path(spec: GoNode) -> str:
  path = spec.child_by_field("path")
  return unquote_path(path.source) if path is not None else ""


def spec_binding(spec: GoNode) -> str:
  """
  Returns the name an ``import_spec`` binds: its alias if given (including
  ``.`` and ``_``), otherwise the default name of its path.
  """
  alias = spec.child_by_field("name")
  if alias is not None:
    return alias.source
  return default_name(spec_path(spec))


def declaration_specs(decl: GoNode) -> List[GoNode]:
  """Lists the ``import_spec`` nodes of one import declaration in order."""
  specs = []
  for child in decl.children:
    if child.kind == NodeKind.IMPORT_SPEC:
      specs.append(child)
    elif child.kind == NodeKind.IMPORT_SPEC_LIST:
      specs.extend(c for c in child.children if c.kind == NodeKind.IMPORT_SPEC)
  return specs


def file_specs(tree: SourceFile) -> List[GoNode]:
  specs = []
  for decl in tree.top_level(NodeKind.IMPORT_DECLARATION):
    specs.extend(declaration_specs(decl))
  return specs


@dataclass(frozen=True)
class ImportSet:
  """
  Names bound by the import declarations of one file.

  Built fresh for every file and passed by value; adding an import returns a
  new set.

  Attributes:
      names (FrozenSet[str]): Bound package names (aliases or default names).
      paths (FrozenSet[str]): Imported paths, whatever name they are bound to.
  """

  names: FrozenSet[str] = field(default_factory=frozenset)
  paths: FrozenSet[str] = field(default_factory=frozenset)

  @classmethod
  def from_tree(cls, tree: SourceFile) -> "ImportSet":
    specs = file_specs(tree)
    return cls(
      names=frozenset(spec_binding(spec) for spec in specs),
      paths=frozenset(spec_path(spec) for spec in specs),
    )

  def __contains__(self, name: object) -> bool:
    return name in self.names

  def __len__(self) -> int:
    return len(self.names)

  def with_imports(self, paths: Iterable[str]) -> "ImportSet":
    """Returns the set extended by plain (unaliased) imports of `paths`."""
    paths = frozenset(paths)
    return ImportSet(self.names | {default_name(p) for p in paths}, self.paths | paths)

  def missing(self, paths: Iterable[str]) -> List[str]:
    """
    Filters `paths` down to those whose default name is not bound yet.

    A path imported only under another name (``golog "log"``, ``. "flag"``) is
    still missing: the guard refers to the package by its default name, and Go
    accepts the same path imported twice under different names.

    Args:
        paths: Required import paths.

    Returns:
        List[str]: Missing paths, deduplicated, original order kept.
    """
    result: List[str] = []
    for path in paths:
      if default_name(path) not in self.names and path not in result:
        result.append(path)
    return result

  def aliased(self, paths: Iterable[str]) -> List[str]:
    """Those of `paths` that are imported, but not under their default name."""
    return [p for p in self.missing(paths) if p in self.paths]
