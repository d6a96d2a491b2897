"""
編譯器配置測試
"""

import logging

import pytest

from schema_compiler import ACCESS_CATALOG, MSSQL_CATALOG, CompilerConfig
from schema_compiler.exceptions import CatalogConfigurationError
from schema_compiler.utils import NullLogger, get_logger


def test_defaults():
    config = CompilerConfig()
    assert config.dialect == "access"
    assert config.default_enum_length == 50
    assert config.default_decimal_precision == 19
    assert config.default_decimal_scale == 2
    assert config.managed_index_prefix == "IDX_"
    assert config.build_catalog() is ACCESS_CATALOG


def test_invalid_values_rejected():
    with pytest.raises(CatalogConfigurationError) as exc_info:
        CompilerConfig(log_level="VERBOSE")
    assert exc_info.value.config_key == "log_level"

    with pytest.raises(CatalogConfigurationError):
        CompilerConfig(default_enum_length=0)

    with pytest.raises(CatalogConfigurationError):
        CompilerConfig(default_string_length=-1)


def test_log_level_normalized():
    assert CompilerConfig(log_level="debug").log_level == "DEBUG"


def test_build_catalog_with_overrides():
    config = CompilerConfig(dialect="mssql", type_overrides={"String": "nvarchar"})
    catalog = config.build_catalog()
    assert catalog.resolve_physical_type("String") == "nvarchar"
    assert MSSQL_CATALOG.resolve_physical_type("String") == "varchar"


def test_build_catalog_unknown_dialect():
    with pytest.raises(CatalogConfigurationError):
        CompilerConfig(dialect="oracle").build_catalog()


def test_from_dict_ignores_unknown_keys():
    config = CompilerConfig.from_dict({"dialect": "mssql", "default_enum_length": 100, "unused": True})
    assert config.dialect == "mssql"
    assert config.default_enum_length == 100


def test_from_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[compiler]\n'
        'dialect = "mssql"\n'
        'default_string_length = 255\n'
        'managed_index_prefix = "UK_"\n'
        '\n'
        '[compiler.type_overrides]\n'
        'Long = "numeric"\n',
        encoding="utf-8",
    )
    config = CompilerConfig.from_toml(path)
    assert config.dialect == "mssql"
    assert config.default_string_length == 255
    assert config.managed_index_prefix == "UK_"
    assert config.build_catalog().resolve_physical_type("Long") == "numeric"


def test_from_toml_missing_section(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[database]\ndb_path = "x.duckdb"\n', encoding="utf-8")
    with pytest.raises(KeyError):
        CompilerConfig.from_toml(path)


def test_from_toml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CompilerConfig.from_toml(tmp_path / "nope.toml")


def test_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "compiler:\n"
        "  dialect: access\n"
        "  default_enum_length: 30\n"
        "  delete_ts_in_unique_index: false\n"
        "  default_overrides:\n"
        "    String: \"'-'\"\n",
        encoding="utf-8",
    )
    config = CompilerConfig.from_yaml(path)
    assert config.default_enum_length == 30
    assert config.delete_ts_in_unique_index is False
    assert config.build_catalog().resolve_default_value("String") == "'-'"


def test_from_yaml_empty(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        CompilerConfig.from_yaml(path)


def test_copy_keeps_logger():
    logger = NullLogger()
    config = CompilerConfig(logger=logger, default_enum_length=20)
    copied = config.copy(dialect="mssql")
    assert copied.dialect == "mssql"
    assert copied.default_enum_length == 20
    assert copied.logger is logger
    assert "logger" not in config.to_dict()


def test_get_logger_prefers_external():
    external = logging.getLogger("external.test")
    assert get_logger("schema_compiler.test", external_logger=external) is external

    logger = get_logger("schema_compiler.test_builtin", level="DEBUG", use_colors=False)
    assert logger.level == logging.DEBUG
    assert logger.handlers
