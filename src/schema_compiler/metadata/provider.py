"""
中繼資料提供者介面

編譯器只需要少量中繼資料查詢來決定要刪除哪些約束與索引，
連線生命週期由提供者負責，編譯器本身不持有任何連線。
"""

from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ContextManager, Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable


@dataclass(frozen=True)
class ConstraintInfo:
    """約束資訊"""
    name: str


@dataclass(frozen=True)
class IndexInfo:
    """索引資訊"""
    name: str
    is_unique: bool = False


@runtime_checkable
class MetadataProvider(Protocol):
    """
    中繼資料提供者協議

    所有查詢都是阻塞 I/O。實作必須在 connection_scope 結束時釋放連線
    (成功、查無結果或發生錯誤都一樣)，失敗時拋出 MetadataAccessError。
    """

    def connection_scope(self) -> ContextManager:
        ...

    def list_foreign_key_constraints(self, table: str, column: Optional[str] = None) -> List[ConstraintInfo]:
        ...

    def list_default_constraints(self, table: str, column: str) -> List[ConstraintInfo]:
        ...

    def list_indexes_for_column(self, table: str, column: str) -> List[IndexInfo]:
        ...


class StaticMetadataProvider:
    """
    記憶體內的中繼資料提供者

    用於乾跑 (沒有資料庫連線) 與測試。表格與欄位名稱不分大小寫。

    Example:
        >>> provider = StaticMetadataProvider()
        >>> provider.add_foreign_key("ORDERS", "FK_ORDERS_CUSTOMER", column="CUSTOMER_ID")
        >>> provider.list_foreign_key_constraints("orders")
        [ConstraintInfo(name='FK_ORDERS_CUSTOMER')]
    """

    def __init__(self):
        self._foreign_keys: Dict[str, List[Tuple[str, Optional[str]]]] = defaultdict(list)
        self._defaults: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        self._indexes: Dict[Tuple[str, str], List[IndexInfo]] = defaultdict(list)
        self.scopes_opened = 0
        self.scopes_closed = 0

    @staticmethod
    def _key(name: str) -> str:
        return name.upper()

    def add_foreign_key(self, table: str, name: str, column: Optional[str] = None) -> None:
        self._foreign_keys[self._key(table)].append((name, column and self._key(column)))

    def add_default_constraint(self, table: str, column: str, name: str) -> None:
        self._defaults[(self._key(table), self._key(column))].append(name)

    def add_index(self, table: str, column: str, name: str, is_unique: bool = False) -> None:
        self._indexes[(self._key(table), self._key(column))].append(IndexInfo(name, is_unique))

    @contextmanager
    def connection_scope(self) -> Iterator[None]:
        self.scopes_opened += 1
        try:
            yield None
        finally:
            self.scopes_closed += 1

    def list_foreign_key_constraints(self, table: str, column: Optional[str] = None) -> List[ConstraintInfo]:
        entries = self._foreign_keys.get(self._key(table), [])
        if column is not None:
            entries = [e for e in entries if e[1] == self._key(column)]
        return [ConstraintInfo(name) for name, _ in entries]

    def list_default_constraints(self, table: str, column: str) -> List[ConstraintInfo]:
        return [ConstraintInfo(n) for n in self._defaults.get((self._key(table), self._key(column)), [])]

    def list_indexes_for_column(self, table: str, column: str) -> List[IndexInfo]:
        return list(self._indexes.get((self._key(table), self._key(column)), []))
