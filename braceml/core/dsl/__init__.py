"""
DSL Processing Module
====================

Parsing of the brace-delimited markup language into a document tree.

Components:
- combinators: cursor, result types and composable parsing helpers
- errors: DoctypeSyntaxError, ElementSyntaxError, StringSyntaxError
- parser: grammar rules and the parse_document / parse_dsl entry points
"""
