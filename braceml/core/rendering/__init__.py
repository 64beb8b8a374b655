"""
Rendering Module
================

Document tree to HTML conversion.

Components:
- html_generator: deterministic serializer and formatter hand-off
- formatter: pretty-printing backends behind BaseHTMLFormatter
"""
