"""
Core Package.

Contains the patching logic:
- Go frontend (parser, tree, emitter)
- Scanners for qualified references
- Rewriter (function locator, guard insertion)
- Import fixer
- Patch engine
"""
