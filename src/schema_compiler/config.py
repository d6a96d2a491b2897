"""
Schema Compiler 配置模組

支援多種配置方式:
- CompilerConfig dataclass 實例
- dict 字典
- TOML 檔案
- YAML 檔案
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import logging

from .catalog import TypeCatalog, get_catalog
from .exceptions import CatalogConfigurationError


@dataclass
class CompilerConfig:
    """
    Schema Compiler 配置

    Attributes:
        dialect: 方言名稱 ("access", "mssql" 或已註冊的自訂方言)
        logger: 外部注入的日誌器，為 None 時使用內建日誌
        log_level: 日誌級別 ("DEBUG", "INFO", "WARNING", "ERROR")
        enable_statement_logging: 是否以 DEBUG 記錄每個產生的語句
        default_string_length: 文字屬性未指定長度時的長度，None 表示 max
        default_enum_length: 字串列舉欄位的長度
        default_decimal_precision: decimal 屬性未指定精度時使用的精度
        default_decimal_scale: decimal 屬性未指定小數位數時使用的小數位數
        managed_index_prefix: 由唯一索引更新流程自行管理的索引名稱前綴，
            刪除欄位時不會一併刪除這些唯一索引；None 表示全部刪除
        delete_ts_in_unique_index: 軟刪除實體的唯一索引是否包含 DELETE_TS
        generate_separately_drop_scripts: 孤立欄位的刪除語句是否另外產生
        type_overrides: 覆寫方言的邏輯類型 -> 欄位類型對應
        default_overrides: 覆寫方言的預設值對應
        db_path: 中繼資料查詢使用的資料庫路徑
        read_only: 是否以唯讀模式開啟中繼資料連線
    """

    # 方言設定
    dialect: str = "access"

    # 日誌設定 (可插拔)
    logger: Optional[logging.Logger] = field(default=None, repr=False)
    log_level: str = "INFO"
    enable_statement_logging: bool = True

    # 欄位預設參數
    default_string_length: Optional[int] = None
    default_enum_length: int = 50
    default_decimal_precision: int = 19
    default_decimal_scale: int = 2

    # 產生規則
    managed_index_prefix: Optional[str] = "IDX_"
    delete_ts_in_unique_index: bool = True
    generate_separately_drop_scripts: bool = True

    # 方言覆寫
    type_overrides: Dict[str, str] = field(default_factory=dict)
    default_overrides: Dict[str, str] = field(default_factory=dict)

    # 中繼資料連線設定
    db_path: str = ":memory:"
    read_only: bool = True

    def __post_init__(self):
        """初始化後處理"""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise CatalogConfigurationError(
                "log_level",
                f"無效的 log_level: {self.log_level}，有效值: {valid_levels}"
            )
        self.log_level = self.log_level.upper()

        if self.default_enum_length <= 0:
            raise CatalogConfigurationError(
                "default_enum_length", f"列舉欄位長度必須大於 0: {self.default_enum_length}"
            )
        if self.default_string_length is not None and self.default_string_length <= 0:
            raise CatalogConfigurationError(
                "default_string_length", f"文字欄位長度必須大於 0: {self.default_string_length}"
            )

    def build_catalog(self) -> TypeCatalog:
        """
        取得套用覆寫後的方言目錄

        Raises:
            CatalogConfigurationError: 方言未註冊
        """
        catalog = get_catalog(self.dialect)
        if self.type_overrides or self.default_overrides:
            catalog = catalog.with_overrides(
                types=self.type_overrides,
                default_values=self.default_overrides,
            )
        return catalog

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompilerConfig":
        """
        從字典建立配置

        Example:
            >>> config = CompilerConfig.from_dict({
            ...     "dialect": "mssql",
            ...     "default_enum_length": 100
            ... })
        """
        # 只取出 dataclass 定義的欄位
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {
            k: v for k, v in data.items()
            if k in valid_fields
        }
        return cls(**filtered_data)

    @classmethod
    def from_toml(
        cls,
        path: str | Path,
        section: str = "compiler"
    ) -> "CompilerConfig":
        """
        從 TOML 檔案建立配置

        Args:
            path: TOML 檔案路徑
            section: 配置區段名稱，預設為 "compiler"

        Raises:
            FileNotFoundError: 檔案不存在
            KeyError: 指定的 section 不存在

        Example:
            >>> config = CompilerConfig.from_toml("config.toml", section="compiler")
        """
        import tomllib

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"配置檔案不存在: {path}")

        with open(path, "rb") as f:
            toml_data = tomllib.load(f)

        if section not in toml_data:
            raise KeyError(f"配置檔案中找不到 [{section}] 區段")

        return cls.from_dict(toml_data[section])

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        section: str = "compiler"
    ) -> "CompilerConfig":
        """
        從 YAML 檔案建立配置

        Args:
            path: YAML 檔案路徑 (.yaml 或 .yml)
            section: 配置區段名稱，預設為 "compiler"

        Raises:
            FileNotFoundError: 檔案不存在
            KeyError: 指定的 section 不存在
            ValueError: 檔案為空或格式錯誤
        """
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"配置檔案不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)

        if yaml_data is None:
            raise ValueError(f"YAML 檔案為空或格式錯誤: {path}")

        if section not in yaml_data:
            raise KeyError(f"配置檔案中找不到 '{section}' 區段")

        return cls.from_dict(yaml_data[section])

    def to_dict(self) -> Dict[str, Any]:
        """轉換為字典 (排除 logger)"""
        return {
            "dialect": self.dialect,
            "log_level": self.log_level,
            "enable_statement_logging": self.enable_statement_logging,
            "default_string_length": self.default_string_length,
            "default_enum_length": self.default_enum_length,
            "default_decimal_precision": self.default_decimal_precision,
            "default_decimal_scale": self.default_decimal_scale,
            "managed_index_prefix": self.managed_index_prefix,
            "delete_ts_in_unique_index": self.delete_ts_in_unique_index,
            "generate_separately_drop_scripts": self.generate_separately_drop_scripts,
            "type_overrides": dict(self.type_overrides),
            "default_overrides": dict(self.default_overrides),
            "db_path": self.db_path,
            "read_only": self.read_only,
        }

    def copy(self, **overrides) -> "CompilerConfig":
        """
        建立配置副本，可覆蓋部分設定

        Example:
            >>> new_config = config.copy(dialect="mssql")
        """
        data = self.to_dict()
        data.update(overrides)
        if self.logger and "logger" not in overrides:
            data["logger"] = self.logger
        return CompilerConfig.from_dict(data)
