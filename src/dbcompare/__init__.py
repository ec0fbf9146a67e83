"""
dbcompare - SQLite and DuckDB, side by side

Illustrations comparing two embedded SQL engines along storage orientation,
supported data types, type enforcement, and geometry/blob round-tripping,
rendered into a small markdown book.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
