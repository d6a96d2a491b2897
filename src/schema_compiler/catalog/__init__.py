"""
方言類型目錄模組

Example:
    >>> from schema_compiler.catalog import get_catalog
    >>> catalog = get_catalog("access")
    >>> catalog.resolve_physical_type("String")
    'varchar'
    >>> "nchar" in catalog.synonyms_of("varchar")
    True
"""

from .type_catalog import (
    TypeCatalog,
    SynonymClass,
    NumericRules,
    TemporalCategory,
    INTEGER_MAX,
    WIDE_CHAR_MAX,
)
from .dialects import (
    ACCESS_CATALOG,
    MSSQL_CATALOG,
    get_catalog,
    register_catalog,
    available_dialects,
)

__all__ = [
    "TypeCatalog",
    "SynonymClass",
    "NumericRules",
    "TemporalCategory",
    "INTEGER_MAX",
    "WIDE_CHAR_MAX",
    "ACCESS_CATALOG",
    "MSSQL_CATALOG",
    "get_catalog",
    "register_catalog",
    "available_dialects",
]
