"""
Shares command-line adapter.
"""

from adapters.cli.main import build_parser, main

__all__ = ["build_parser", "main"]
