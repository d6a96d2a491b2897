"""
DDL 語句產生模組

Example:
    >>> from schema_compiler.builder import StatementBuilder
    >>> from schema_compiler.catalog import ACCESS_CATALOG
    >>> builder = StatementBuilder(ACCESS_CATALOG)
    >>> builder.drop_table_statement("customer")
    'drop table CUSTOMER ^'
"""

from .statement import Statement, StatementCategory
from .defaults import DefaultBehaviors
from .statement_builder import StatementBuilder

__all__ = [
    "Statement",
    "StatementCategory",
    "DefaultBehaviors",
    "StatementBuilder",
]
