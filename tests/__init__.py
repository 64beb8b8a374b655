"""
Test Suite
==========

Test suite matching the braceml/ package structure.

Test Categories:
- unit: Unit tests for individual components
"""
