"""
中繼資料提供者測試

DuckDB 提供者以暫存資料庫檔案測試。
"""

import duckdb
import pytest

from schema_compiler import CompilerConfig, DuckDBMetadataProvider, MetadataQueries, StaticMetadataProvider
from schema_compiler.exceptions import MetadataAccessError
from schema_compiler.metadata import ConstraintInfo, IndexInfo, MetadataProvider
from schema_compiler.utils import NullLogger


@pytest.fixture
def db_path(tmp_path):
    """建立含外鍵與索引的測試資料庫"""
    path = tmp_path / "schema.duckdb"
    conn = duckdb.connect(str(path))
    try:
        conn.execute("CREATE TABLE customer (id INTEGER PRIMARY KEY, name VARCHAR)")
        conn.execute(
            "CREATE TABLE orders ("
            "id INTEGER PRIMARY KEY, "
            "customer_id INTEGER REFERENCES customer(id), "
            "code VARCHAR)"
        )
        conn.execute("CREATE INDEX ix_orders_code ON orders (code)")
        conn.execute("CREATE UNIQUE INDEX idx_orders_uk_code ON orders (code)")
    finally:
        conn.close()
    return path


@pytest.fixture
def duckdb_provider(db_path):
    config = CompilerConfig(db_path=str(db_path), logger=NullLogger())
    return DuckDBMetadataProvider(config)


# ========== StaticMetadataProvider ==========

def test_static_provider_is_case_insensitive():
    provider = StaticMetadataProvider()
    provider.add_foreign_key("orders", "FK_ORDERS_CUSTOMER", column="customer_id")
    provider.add_index("ORDERS", "CODE", "IX_ORDERS_CODE", is_unique=False)

    assert provider.list_foreign_key_constraints("ORDERS") == [ConstraintInfo("FK_ORDERS_CUSTOMER")]
    assert provider.list_foreign_key_constraints("ORDERS", "CUSTOMER_ID") == [ConstraintInfo("FK_ORDERS_CUSTOMER")]
    assert provider.list_foreign_key_constraints("ORDERS", "CODE") == []
    assert provider.list_indexes_for_column("orders", "code") == [IndexInfo("IX_ORDERS_CODE", False)]
    assert provider.list_default_constraints("ORDERS", "CODE") == []


def test_providers_satisfy_protocol(duckdb_provider):
    assert isinstance(StaticMetadataProvider(), MetadataProvider)
    assert isinstance(duckdb_provider, MetadataProvider)


# ========== DuckDBMetadataProvider ==========

def test_foreign_keys(duckdb_provider):
    with duckdb_provider.connection_scope():
        table_keys = duckdb_provider.list_foreign_key_constraints("ORDERS")
        column_keys = duckdb_provider.list_foreign_key_constraints("ORDERS", "CUSTOMER_ID")
        other_keys = duckdb_provider.list_foreign_key_constraints("ORDERS", "CODE")

    assert len(table_keys) == 1
    assert column_keys == table_keys
    assert other_keys == []


def test_indexes_for_column(duckdb_provider):
    indexes = duckdb_provider.list_indexes_for_column("ORDERS", "CODE")
    assert {i.name for i in indexes} == {"ix_orders_code", "idx_orders_uk_code"}
    assert {i.name: i.is_unique for i in indexes} == {"ix_orders_code": False, "idx_orders_uk_code": True}
    assert duckdb_provider.list_indexes_for_column("ORDERS", "CUSTOMER_ID") == []


def test_default_constraints_empty_without_query(duckdb_provider):
    assert duckdb_provider.list_default_constraints("ORDERS", "CODE") == []


def test_nested_scopes_share_connection(duckdb_provider):
    with duckdb_provider.connection_scope() as outer:
        with duckdb_provider.connection_scope() as inner:
            assert inner is outer


def test_connection_released_after_scope(duckdb_provider, db_path):
    """唯讀連線關閉後可以用讀寫模式重新開啟同一個檔案"""
    duckdb_provider.list_foreign_key_constraints("ORDERS")

    conn = duckdb.connect(str(db_path))
    try:
        conn.execute("CREATE TABLE invoice (id INTEGER)")
    finally:
        conn.close()


def test_query_error_wrapped_and_connection_released(db_path):
    queries = MetadataQueries(foreign_keys="SELECT constraint_name FROM missing_table WHERE table_name = ?")
    provider = DuckDBMetadataProvider(CompilerConfig(db_path=str(db_path), logger=NullLogger()), queries)

    with pytest.raises(MetadataAccessError) as exc_info:
        provider.list_foreign_key_constraints("ORDERS")

    assert exc_info.value.operation == "list_foreign_key_constraints"
    assert exc_info.value.table == "ORDERS"
    assert isinstance(exc_info.value.original_error, duckdb.Error)

    conn = duckdb.connect(str(db_path))
    conn.close()


def test_missing_database_raises(tmp_path):
    config = CompilerConfig(db_path=str(tmp_path / "missing.duckdb"), logger=NullLogger())
    provider = DuckDBMetadataProvider(config)

    with pytest.raises(MetadataAccessError) as exc_info:
        provider.list_indexes_for_column("ORDERS", "CODE")
    assert exc_info.value.operation == "connect"


def test_configured_default_constraint_query(db_path):
    """其他資料庫可透過配置查詢取得預設值約束"""
    queries = MetadataQueries(
        default_constraints=(
            "SELECT 'DF_' || upper(table_name) || '_' || upper(column_name) AS constraint_name "
            "FROM information_schema.columns "
            "WHERE upper(table_name) = upper(?) AND upper(column_name) = upper(?)"
        )
    )
    provider = DuckDBMetadataProvider(CompilerConfig(db_path=str(db_path), logger=NullLogger()), queries)
    assert provider.list_default_constraints("orders", "code") == [ConstraintInfo("DF_ORDERS_CODE")]


def test_resolve_config_from_path(db_path):
    provider = DuckDBMetadataProvider(str(db_path))
    assert provider.config.db_path == str(db_path)
    assert provider.config.read_only is True

    with pytest.raises(TypeError):
        DuckDBMetadataProvider(42)
