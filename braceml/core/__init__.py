"""
Core Module
===========

Business logic for compiling the DSL to HTML.

Components:
- dsl: DSL grammar, parser and parse errors
- rendering: HTML serialization and pretty-printing
- pipeline: parse, serialize and format in one call
"""
