"""
braceml
=======

A compiler for a brace-delimited, CSS-selector-flavoured shorthand for HTML.

This package provides:
- A recursive-descent DSL parser producing an immutable document tree
- A deterministic tree-to-HTML serializer
- Pluggable HTML pretty-printing with fallback to unformatted output
- A command line interface reading a file or standard input
"""

__version__ = "1.0.0"
__author__ = "braceml developers"
