"""
中繼資料提供者模組

Example:
    >>> from schema_compiler.metadata import DuckDBMetadataProvider
    >>> provider = DuckDBMetadataProvider("./schema.duckdb")
    >>> with provider.connection_scope():
    ...     provider.list_foreign_key_constraints("ORDERS")
"""

from .provider import (
    MetadataProvider,
    StaticMetadataProvider,
    ConstraintInfo,
    IndexInfo,
)
from .duckdb_provider import DuckDBMetadataProvider, MetadataQueries

__all__ = [
    "MetadataProvider",
    "StaticMetadataProvider",
    "ConstraintInfo",
    "IndexInfo",
    "DuckDBMetadataProvider",
    "MetadataQueries",
]
