"""
AtomC Command-Line Interface
============================

- **atomc-check**: tokenize and syntax-check an AtomC source file

The tool is a Click application; see ``atomc-check --help``.
"""

__all__ = ["atomc_check"]
