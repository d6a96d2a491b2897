"""
Schema Compiler 自定義異常模組

所有異常類都繼承 SchemaCompilerError，呼叫端可以一次捕捉全部編譯錯誤。
結構性/配置錯誤會同步拋給直接呼叫者，不做重試。
"""

from typing import Optional


class SchemaCompilerError(Exception):
    """Schema Compiler 基礎異常類"""
    pass


class CatalogConfigurationError(SchemaCompilerError):
    """
    類型目錄或編譯器配置錯誤

    Attributes:
        config_key: 出錯的配置鍵名
        message: 錯誤訊息
    """

    def __init__(self, config_key: str, message: str = None):
        self.config_key = config_key
        self.message = message or f"配置錯誤: {config_key}"
        super().__init__(self.message)


class UnknownLogicalTypeError(SchemaCompilerError):
    """
    邏輯類型在方言目錄中找不到對應的實體欄位類型

    屬於致命錯誤，絕不產生猜測的 DDL。

    Attributes:
        logical_type: 邏輯類型 (例如 'String', 'UUID')
        dialect: 方言名稱
        attribute: 屬性名稱 (若已知)
        table: 表格名稱 (若已知)
    """

    def __init__(
        self,
        logical_type: str,
        dialect: str,
        attribute: Optional[str] = None,
        table: Optional[str] = None,
    ):
        self.logical_type = logical_type
        self.dialect = dialect
        self.attribute = attribute
        self.table = table
        message = f"方言 '{dialect}' 未定義邏輯類型 '{logical_type}' 的欄位類型"
        if attribute:
            message += f" (屬性: {table + '.' if table else ''}{attribute})"
        super().__init__(message)


class InvalidAttributeConfigurationError(SchemaCompilerError):
    """
    屬性描述不符合操作要求

    例如在需要純量欄位的地方傳入嵌入 (embedded) 屬性。

    Attributes:
        attribute: 屬性名稱
        table: 表格名稱 (若已知)
        message: 錯誤訊息
    """

    def __init__(self, attribute: str, message: str = None, table: Optional[str] = None):
        self.attribute = attribute
        self.table = table
        self.message = message or f"屬性配置錯誤: {attribute}"
        super().__init__(self.message)


class MetadataAccessError(SchemaCompilerError):
    """
    讀取資料庫中繼資料失敗

    由 MetadataProvider 在釋放連線後拋出，編譯器原樣向上傳遞。

    Attributes:
        operation: 失敗的查詢操作名稱
        table: 表格名稱
        original_error: 原始異常
    """

    def __init__(self, operation: str, table: str, original_error: Exception = None):
        self.operation = operation
        self.table = table
        self.original_error = original_error
        message = f"中繼資料查詢失敗: {operation} (表格: {table})"
        if original_error:
            message += f"\n原始錯誤: {original_error}"
        super().__init__(message)
