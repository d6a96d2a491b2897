"""
DDL 語句值物件
"""

from enum import Enum


class StatementCategory(Enum):
    """語句類別，只用於排序與報告"""
    CREATE = "create"
    ALTER = "alter"
    DROP = "drop"
    RENAME = "rename"
    UPDATE = "update"


class Statement(str):
    """
    以分隔記號結尾的 DDL 語句

    本身就是字串，可以直接與預期文字比較或寫入腳本；
    category 屬性記錄語句類別。

    Example:
        >>> stmt = Statement("drop table CUSTOMER ^", StatementCategory.DROP)
        >>> stmt == "drop table CUSTOMER ^"
        True
        >>> stmt.category
        <StatementCategory.DROP: 'drop'>
    """

    category: StatementCategory

    def __new__(cls, text: str, category: StatementCategory = StatementCategory.ALTER):
        obj = super().__new__(cls, text)
        obj.category = category
        return obj

    @property
    def text(self) -> str:
        return str.__str__(self)
