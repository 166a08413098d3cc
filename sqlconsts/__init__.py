"""Generate table and column name constants from SQL schemas."""

from .codegen import __version__, generate_from_sql, quick_generate

__all__ = ["__version__", "generate_from_sql", "quick_generate"]
