"""
Import Fixer Package.

Ensures a patched Go file imports the packages its new code refers to:

- `ImportSet`: names bound by the file's import declarations.
- `ensure_imports`: adds missing import specs without disturbing existing ones.
"""

from argtail.core.import_fixer.base import ImportSet, default_name, unquote_path
from argtail.core.import_fixer.injection import ensure_imports

__all__ = ["ImportSet", "default_name", "ensure_imports", "unquote_path"]
