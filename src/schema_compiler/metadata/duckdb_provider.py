"""
DuckDB 中繼資料提供者

以可配置的 SQL 查詢讀取約束與索引名稱，查詢結果以 pandas DataFrame 處理。
每個 connection_scope 開啟一個連線，離開時一律關閉；同一執行緒內巢狀的
scope 共用外層連線。
"""

import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import duckdb
import pandas as pd

from ..config import CompilerConfig
from ..exceptions import MetadataAccessError
from ..utils.logging import get_component_logger
from .provider import ConstraintInfo, IndexInfo


@dataclass(frozen=True)
class MetadataQueries:
    """
    中繼資料查詢語句

    預設值對應 DuckDB 的 information_schema 與 duckdb_indexes()。
    其他資料庫可透過 DuckDB 擴充套件 (例如 ATTACH) 或覆寫查詢使用。

    Attributes:
        foreign_keys: 參數 (table)，返回 constraint_name
        column_foreign_keys: 參數 (table, column)，返回 constraint_name
        default_constraints: 參數 (table, column)，返回 constraint_name；
            DuckDB 沒有具名的預設值約束，None 表示不查詢
        column_indexes: 參數 (table)，返回 index_name, is_unique, expressions, sql
    """
    foreign_keys: str = (
        "SELECT constraint_name FROM information_schema.table_constraints "
        "WHERE upper(table_name) = upper(?) AND constraint_type = 'FOREIGN KEY' "
        "ORDER BY constraint_name"
    )
    column_foreign_keys: str = (
        "SELECT DISTINCT tc.constraint_name FROM information_schema.table_constraints tc "
        "JOIN information_schema.key_column_usage kcu "
        "ON tc.constraint_name = kcu.constraint_name AND tc.table_name = kcu.table_name "
        "WHERE upper(tc.table_name) = upper(?) AND upper(kcu.column_name) = upper(?) "
        "AND tc.constraint_type = 'FOREIGN KEY' "
        "ORDER BY tc.constraint_name"
    )
    default_constraints: Optional[str] = None
    column_indexes: str = (
        "SELECT index_name, is_unique, expressions, sql FROM duckdb_indexes() "
        "WHERE upper(table_name) = upper(?) "
        "ORDER BY index_name"
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetadataQueries":
        valid_fields = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in valid_fields})


class DuckDBMetadataProvider:
    """
    以 DuckDB 連線查詢中繼資料

    Example:
        >>> provider = DuckDBMetadataProvider("./schema.duckdb")
        >>> with provider.connection_scope():
        ...     fks = provider.list_foreign_key_constraints("ORDERS")
        ...     indexes = provider.list_indexes_for_column("ORDERS", "CUSTOMER_ID")
    """

    def __init__(
        self,
        config: Union[CompilerConfig, Dict[str, Any], str, Path, None] = None,
        queries: Optional[MetadataQueries] = None,
    ):
        self.config = self._resolve_config(config)
        self.queries = queries or MetadataQueries()
        self.logger = get_component_logger("metadata", self.config)
        self._local = threading.local()

    @staticmethod
    def _resolve_config(
        config: Union[CompilerConfig, Dict[str, Any], str, Path, None]
    ) -> CompilerConfig:
        """解析配置"""
        if config is None:
            return CompilerConfig()
        if isinstance(config, CompilerConfig):
            return config
        if isinstance(config, dict):
            return CompilerConfig.from_dict(config)
        if isinstance(config, (str, Path)):
            return CompilerConfig(db_path=str(config))
        raise TypeError(f"不支援的配置類型: {type(config)}")

    # ========== 連線管理 ==========

    @contextmanager
    def connection_scope(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        取得範圍連線，離開時保證關閉

        Raises:
            MetadataAccessError: 無法開啟連線
        """
        active = getattr(self._local, "conn", None)
        if active is not None:
            yield active
            return

        db_path = self.config.db_path
        # 記憶體資料庫不能以唯讀模式開啟
        read_only = self.config.read_only and db_path != ":memory:"
        try:
            conn = duckdb.connect(db_path, read_only=read_only)
        except duckdb.Error as e:
            self.logger.error(f"連接資料庫失敗: {e}")
            raise MetadataAccessError("connect", db_path, e) from e

        self._local.conn = conn
        self.logger.debug(f"開啟中繼資料連線: {db_path}")
        try:
            yield conn
        finally:
            self._local.conn = None
            conn.close()
            self.logger.debug(f"關閉中繼資料連線: {db_path}")

    def _query(self, operation: str, table: str, sql: str, params: Sequence[Any]) -> pd.DataFrame:
        try:
            with self.connection_scope() as conn:
                if self.config.enable_statement_logging:
                    self.logger.debug(f"{operation}: {sql[:100]}... {list(params)}")
                return conn.execute(sql, list(params)).df()
        except duckdb.Error as e:
            self.logger.error(f"{operation} 查詢失敗 (表格: {table}): {e}")
            raise MetadataAccessError(operation, table, e) from e

    # ========== 查詢 ==========

    def list_foreign_key_constraints(self, table: str, column: Optional[str] = None) -> List[ConstraintInfo]:
        """列出表格 (或表格中某欄位) 的外鍵約束，依查詢順序返回"""
        if column is None:
            df = self._query("list_foreign_key_constraints", table, self.queries.foreign_keys, [table])
        else:
            df = self._query(
                "list_foreign_key_constraints", table, self.queries.column_foreign_keys, [table, column]
            )
        return [ConstraintInfo(str(name)) for name in df["constraint_name"].tolist()]

    def list_default_constraints(self, table: str, column: str) -> List[ConstraintInfo]:
        if not self.queries.default_constraints:
            return []
        df = self._query(
            "list_default_constraints", table, self.queries.default_constraints, [table, column]
        )
        return [ConstraintInfo(str(name)) for name in df["constraint_name"].tolist()]

    def list_indexes_for_column(self, table: str, column: str) -> List[IndexInfo]:
        """列出包含指定欄位的索引"""
        df = self._query("list_indexes_for_column", table, self.queries.column_indexes, [table])
        if df.empty:
            return []

        pattern = re.compile(rf"(?<![A-Za-z0-9_]){re.escape(column)}(?![A-Za-z0-9_])", re.IGNORECASE)
        # 部分版本的 expressions 對純欄位索引為空，改比對 CREATE INDEX 括號內的欄位清單
        targets = df["expressions"].fillna("").astype(str)
        if "sql" in df.columns:
            column_lists = df["sql"].fillna("").astype(str).map(
                lambda sql: sql.split("(", 1)[1] if "(" in sql else ""
            )
            targets = targets + " " + column_lists
        mask = targets.map(lambda expr: bool(pattern.search(expr)))
        return [
            IndexInfo(name=str(row.index_name), is_unique=bool(row.is_unique))
            for row in df[mask].itertuples(index=False)
        ]
