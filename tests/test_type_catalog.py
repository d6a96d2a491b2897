"""
方言類型目錄測試
"""

import pytest

from schema_compiler.catalog import (
    ACCESS_CATALOG,
    INTEGER_MAX,
    MSSQL_CATALOG,
    WIDE_CHAR_MAX,
    TemporalCategory,
    TypeCatalog,
    available_dialects,
    get_catalog,
    register_catalog,
)
from schema_compiler.exceptions import CatalogConfigurationError, UnknownLogicalTypeError


def test_resolve_physical_type():
    """邏輯類型對應到方言欄位類型"""
    assert ACCESS_CATALOG.resolve_physical_type("String") == "varchar"
    assert ACCESS_CATALOG.resolve_physical_type("UUID") == "uniqueidentifier"
    assert ACCESS_CATALOG.resolve_physical_type("Long") == "decimal"
    assert MSSQL_CATALOG.resolve_physical_type("Long") == "bigint"


def test_unknown_logical_type_is_fatal():
    """未定義的邏輯類型直接拋出，不猜測"""
    with pytest.raises(UnknownLogicalTypeError) as exc_info:
        ACCESS_CATALOG.resolve_physical_type("LocalDate")
    assert exc_info.value.logical_type == "LocalDate"
    assert exc_info.value.dialect == "access"


def test_resolve_default_value():
    assert ACCESS_CATALOG.resolve_default_value("Integer") == "0"
    assert ACCESS_CATALOG.resolve_default_value("String") == "''"
    assert ACCESS_CATALOG.resolve_default_value("Customer") is None


def test_synonyms_of():
    """同義類別不分大小寫，不屬於任何類別時返回空集合"""
    synonyms = ACCESS_CATALOG.synonyms_of("VARCHAR")
    assert "nchar" in synonyms
    assert "text(max)" in synonyms
    assert ACCESS_CATALOG.synonyms_of("counter") == frozenset()


def test_synonym_classes_are_disjoint():
    """每個類型最多屬於一個同義類別"""
    seen = set()
    for synonym_class in ACCESS_CATALOG.synonym_classes:
        members = synonym_class.as_set()
        assert not (members & seen)
        seen |= members


def test_overlapping_synonym_classes_rejected():
    """同一類型出現在兩個同義類別時，建立目錄即失敗並指出該類型"""
    with pytest.raises(CatalogConfigurationError) as exc_info:
        TypeCatalog(
            name="broken",
            types={"String": "varchar"},
            temporal_types={"TIMESTAMP": "datetime"},
            synonym_classes=(("varchar", "text"), ("text", "memo")),
        )
    assert exc_info.value.config_key == "synonym_classes"
    assert "text" in str(exc_info.value)


def test_temporal_category_access():
    """Access 三種時間類別都是 datetime"""
    assert ACCESS_CATALOG.temporal_category_of("date") is TemporalCategory.DATE
    assert ACCESS_CATALOG.temporal_category_of("TIME") is TemporalCategory.TIME
    assert ACCESS_CATALOG.temporal_category_of("datetime") is TemporalCategory.TIMESTAMP
    assert ACCESS_CATALOG.temporal_category_of("smalldatetime") is TemporalCategory.TIMESTAMP
    assert ACCESS_CATALOG.temporal_category_of("varchar") is TemporalCategory.NONE


def test_temporal_category_mssql_synonym():
    """透過同義類型找到時間類別"""
    assert MSSQL_CATALOG.temporal_category_of("datetime") is TemporalCategory.TIMESTAMP
    assert MSSQL_CATALOG.temporal_category_of("datetime2") is TemporalCategory.TIMESTAMP
    assert MSSQL_CATALOG.temporal_category_of("date") is TemporalCategory.DATE


def test_no_parameter_and_auto_generated_types():
    assert ACCESS_CATALOG.is_no_parameter_type("Integer")
    assert ACCESS_CATALOG.is_no_parameter_type("bigint identity")
    assert not ACCESS_CATALOG.is_no_parameter_type("varchar")
    assert ACCESS_CATALOG.is_auto_generated("COUNTER")
    assert not ACCESS_CATALOG.is_auto_generated("integer")


def test_max_length():
    """寬字元類型使用較小的上限"""
    assert ACCESS_CATALOG.max_length("varchar") == INTEGER_MAX
    assert ACCESS_CATALOG.max_length("nvarchar") == WIDE_CHAR_MAX
    assert ACCESS_CATALOG.max_length("NTEXT") == WIDE_CHAR_MAX


def test_with_overrides_keeps_original():
    """覆寫產生新目錄，原目錄不變"""
    overridden = ACCESS_CATALOG.with_overrides(types={"Long": "integer"}, default_values={"String": "'-'"})
    assert overridden.resolve_physical_type("Long") == "integer"
    assert overridden.resolve_default_value("String") == "'-'"
    assert ACCESS_CATALOG.resolve_physical_type("Long") == "decimal"
    assert overridden.synonyms_of("varchar") == ACCESS_CATALOG.synonyms_of("varchar")


def test_registry():
    """內建方言與自訂方言註冊"""
    assert {"access", "mssql"} <= set(available_dialects())
    assert get_catalog("ACCESS") is ACCESS_CATALOG

    custom = TypeCatalog(
        name="test_registry_dialect",
        types={"String": "text"},
        temporal_types={"TIMESTAMP": "timestamp"},
    )
    register_catalog(custom)
    assert get_catalog("test_registry_dialect") is custom

    with pytest.raises(CatalogConfigurationError):
        register_catalog(custom)
    register_catalog(custom, replace_existing=True)


def test_unknown_dialect():
    with pytest.raises(CatalogConfigurationError) as exc_info:
        get_catalog("oracle")
    assert exc_info.value.config_key == "dialect"


def test_quoter_uses_reserved_words():
    """保留字以方言引號包裹"""
    assert ACCESS_CATALOG.quoter.normalize("user") == "[USER]"
    assert ACCESS_CATALOG.quoter.normalize("customer") == "CUSTOMER"
    assert ACCESS_CATALOG.quoter.normalize("[ORDER]") == "[ORDER]"
    assert MSSQL_CATALOG.quoter.normalize("order") == "[ORDER]"
