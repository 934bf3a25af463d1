"""SharpLisp Language Server package.

This package provides:
- A pygls-based Language Server for SharpLisp.
- A lightweight indexer that scans documents with the real lexer, without evaluation.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
