"""
dfalex Command-Line Interface
=============================

This package provides the ``dfalex`` command-line tool, which scans a
source file and prints its tokens, symbol table and errors, and can dump
the structure of any automaton in the library.

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["dfalex"]
