"""
Lune Command-Line Interface
===========================

This package provides the command-line tools for the Lune front end:

- **lunec**: tokenize and parse a Lune source file

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["lunec"]
