"""
識別符處理模組

集中處理識別符的大小寫與保留字引號，所有產生 DDL 的路徑都透過
IdentifierQuoter，避免各操作之間的引號規則不一致。
"""

import re
from typing import Iterable


class IdentifierQuoter:
    """
    方言識別符處理器

    - 識別符一律轉為大寫 (不區分大小寫的方言)
    - 與保留字衝突或含有特殊字符的識別符以方言的引號包裹

    Example:
        >>> quoter = IdentifierQuoter(["USER", "TABLE"], "[", "]")
        >>> quoter.normalize("user")
        '[USER]'
        >>> quoter.normalize("customer")
        'CUSTOMER'
    """

    # 允許的識別符字符 (字母、數字、底線)
    IDENTIFIER_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

    def __init__(self, reserved_words: Iterable[str], quote_open: str = '"', quote_close: str = '"'):
        self.reserved_words = frozenset(w.upper() for w in reserved_words)
        self.quote_open = quote_open
        self.quote_close = quote_close

    def is_reserved(self, name: str) -> bool:
        return name.upper() in self.reserved_words

    def is_safe_identifier(self, name: str) -> bool:
        """檢查識別符是否可以不加引號直接使用"""
        return bool(self.IDENTIFIER_PATTERN.match(name)) and not self.is_reserved(name)

    def needs_quoting(self, name: str) -> bool:
        if self.is_quoted(name):
            return False
        return not self.is_safe_identifier(name)

    def is_quoted(self, name: str) -> bool:
        return (
            len(name) >= 2
            and name.startswith(self.quote_open)
            and name.endswith(self.quote_close)
        )

    def quote(self, name: str) -> str:
        """
        以方言引號包裹識別符，並轉義內部的結尾引號

        Example:
            >>> IdentifierQuoter([], '"', '"').quote('my"col')
            '"my""col"'
        """
        escaped = name.replace(self.quote_close, self.quote_close * 2)
        return f"{self.quote_open}{escaped}{self.quote_close}"

    def quote_if_needed(self, name: str) -> str:
        return self.quote(name) if self.needs_quoting(name) else name

    def normalize(self, name: str) -> str:
        """轉為大寫後視需要加引號，已加引號的識別符原樣保留"""
        if self.is_quoted(name):
            return name
        return self.quote_if_needed(name.upper())


def escape_string(value: str) -> str:
    """
    轉義 SQL 字串值中的單引號

    Example:
        >>> escape_string("O'Brien")
        "O''Brien"
    """
    return value.replace("'", "''")
