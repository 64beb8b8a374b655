"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application settings and formatter defaults
- logging: Structured logging configuration
"""
