"""
Table layout construction.

Builds the renderer-agnostic layout tree of a commodity table from parsed
records, the row catalog and the color tokens.
"""
from .builder import TableLayoutBuilder, TableModel
from .rows import ROW_CATALOG, RowRule

__all__ = ["TableLayoutBuilder", "TableModel", "ROW_CATALOG", "RowRule"]
