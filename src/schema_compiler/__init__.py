"""
Schema Compiler - 可切換方言的 Schema 遷移編譯器

由實體/屬性描述與 (選擇性的) 資料庫現況，產生建立或演進 schema 所需的
DDL 語句序列，並針對每個變更的屬性判斷是不需變更、原地修改，還是刪除後重建。
編譯器只產生語句，不執行。

基本用法:
    from schema_compiler import StatementBuilder, get_catalog

    builder = StatementBuilder(get_catalog("access"))
    print(builder.create_table_statement(entity))
    print(builder.create_sequence_statement("order_seq", 1, 1))

使用配置物件:
    from schema_compiler import CompilerConfig, StatementBuilder

    config = CompilerConfig(
        dialect="mssql",
        default_string_length=255,
        log_level="DEBUG"
    )
    builder = StatementBuilder(config.build_catalog(), config=config)

    # 從 TOML / YAML 檔案載入配置
    config = CompilerConfig.from_toml("config.toml", section="compiler")
    config = CompilerConfig.from_yaml("config.yaml", section="compiler")

整合專案日誌:
    from schema_compiler import CompilerConfig
    from my_project.logging import get_logger

    config = CompilerConfig(logger=get_logger("schema.compiler"))

禁用日誌:
    from schema_compiler import CompilerConfig
    from schema_compiler.utils import NullLogger

    config = CompilerConfig(logger=NullLogger())

Schema 遷移:
    from schema_compiler import DuckDBMetadataProvider, SchemaDiffOrchestrator

    config = CompilerConfig(db_path="./schema.duckdb")
    provider = DuckDBMetadataProvider(config)
    orchestrator = SchemaDiffOrchestrator(config.build_catalog(), provider, config=config)

    plan = orchestrator.plan_attribute_change(entity, attribute, current_column)
    print(plan.report())
    print(plan.script())
"""

from .config import CompilerConfig
from .catalog import (
    TypeCatalog,
    SynonymClass,
    NumericRules,
    TemporalCategory,
    ACCESS_CATALOG,
    MSSQL_CATALOG,
    get_catalog,
    register_catalog,
    available_dialects,
)
from .compatibility import CompatibilityChecker
from .model import (
    IdType,
    TypeDescriptor,
    ColumnDefinition,
    AttributeDescriptor,
    EntityDescriptor,
)
from .builder import Statement, StatementCategory, DefaultBehaviors, StatementBuilder
from .metadata import (
    MetadataProvider,
    StaticMetadataProvider,
    DuckDBMetadataProvider,
    MetadataQueries,
    ConstraintInfo,
    IndexInfo,
)
from .migration import AttributeDiff, ChangeType, MigrationPlan, SchemaDiffOrchestrator
from .exceptions import (
    SchemaCompilerError,
    CatalogConfigurationError,
    UnknownLogicalTypeError,
    InvalidAttributeConfigurationError,
    MetadataAccessError,
)

__version__ = "1.0.0"

__all__ = [
    # 配置
    "CompilerConfig",
    # 方言目錄
    "TypeCatalog",
    "SynonymClass",
    "NumericRules",
    "TemporalCategory",
    "ACCESS_CATALOG",
    "MSSQL_CATALOG",
    "get_catalog",
    "register_catalog",
    "available_dialects",
    # 差異判斷
    "CompatibilityChecker",
    # 模型描述
    "IdType",
    "TypeDescriptor",
    "ColumnDefinition",
    "AttributeDescriptor",
    "EntityDescriptor",
    # 語句產生
    "Statement",
    "StatementCategory",
    "DefaultBehaviors",
    "StatementBuilder",
    # 中繼資料
    "MetadataProvider",
    "StaticMetadataProvider",
    "DuckDBMetadataProvider",
    "MetadataQueries",
    "ConstraintInfo",
    "IndexInfo",
    # 遷移
    "AttributeDiff",
    "ChangeType",
    "MigrationPlan",
    "SchemaDiffOrchestrator",
    # 異常
    "SchemaCompilerError",
    "CatalogConfigurationError",
    "UnknownLogicalTypeError",
    "InvalidAttributeConfigurationError",
    "MetadataAccessError",
]
