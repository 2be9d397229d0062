"""
Rewriter Package.

- `find_function`: locates the top-level function to patch.
- `insert_guard`: splices the trailing-arguments guard into its body.
"""

from argtail.core.rewriter.guard import find_insert_index, insert_guard, is_call_statement
from argtail.core.rewriter.locator import FunctionBody, find_function

__all__ = [
  "FunctionBody",
  "find_function",
  "find_insert_index",
  "insert_guard",
  "is_call_statement",
]
