"""
CST -> AST node builders, one module per language area.

Importing this package registers every builder and freezes the dispatch
table; nothing may register afterwards.
"""

from __future__ import annotations

from .. import dispatch
from . import assembly, declarations, expressions, statements, types  # noqa: F401

DISPATCH = dispatch.freeze()

__all__ = ["DISPATCH"]
