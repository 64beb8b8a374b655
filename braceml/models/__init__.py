"""
Data Models
===========

Pydantic models shared across the parser, serializer and CLI.

Components:
- schemas: document tree (Plain, Tag, Attribute, Document) and result models
"""
