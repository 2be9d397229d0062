"""
Go Frontend.

Parses Go source into a mutable, lossless syntax tree and prints it back.

- `GoParser`: tree-sitter backed parser producing `SourceFile` trees.
- `GoEmitter`: deterministic printer.
- `GoVisitor`: kind-dispatching traversal base class.
- `builders`: factories for synthesized nodes.
"""

from argtail.core.golang.emitter import GoEmitter
from argtail.core.golang.nodes import GoNode, NodeKind, SourceFile
from argtail.core.golang.parser import GoParser
from argtail.core.golang.visitor import GoVisitor

__all__ = [
  "GoEmitter",
  "GoNode",
  "GoParser",
  "GoVisitor",
  "NodeKind",
  "SourceFile",
]
