"""
預設行為策略

集中處理欄位長度、decimal 參數、主鍵/外鍵類型等「專案層級」的預設值，
StatementBuilder 透過這個物件取得預設，而不是回頭呼叫外部物件。
"""

from typing import Optional, Tuple

from ..catalog import TypeCatalog
from ..config import CompilerConfig
from ..model import AttributeDescriptor, EntityDescriptor, IdType

# 字串主鍵/外鍵未指定長度時的長度
DEFAULT_STRING_KEY_LENGTH = 255


class DefaultBehaviors:
    """
    欄位預設值策略

    可繼承後覆寫個別方法以套用專案慣例。

    Example:
        >>> defaults = DefaultBehaviors(ACCESS_CATALOG, CompilerConfig(default_string_length=255))
        >>> defaults.decimal_params(entity, price_attr)
        '19, 2'
    """

    def __init__(self, catalog: TypeCatalog, config: Optional[CompilerConfig] = None):
        self.catalog = catalog
        self.config = config or CompilerConfig(dialect=catalog.name)

    def column_length(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> Optional[int]:
        """文字欄位長度，None 或 0 表示 max"""
        if attribute.length:
            return attribute.length
        return self.config.default_string_length

    def enum_column_length(self) -> int:
        return self.config.default_enum_length

    def decimal_precision_scale(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> Tuple[int, int]:
        """DDL 實際使用的 (精度, 小數位數)，未指定時套用配置預設"""
        precision = attribute.precision or self.config.default_decimal_precision
        scale = attribute.scale if attribute.scale is not None else self.config.default_decimal_scale
        return precision, scale

    def decimal_params(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> str:
        precision, scale = self.decimal_precision_scale(entity, attribute)
        return f"{precision}, {scale}"

    def key_id_type(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> IdType:
        """主鍵使用實體的主鍵類型，外鍵使用被參照實體的主鍵類型"""
        if attribute.is_id:
            return entity.id_type
        return attribute.reference_id_type

    def primary_or_foreign_key_type(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> str:
        """
        主鍵或外鍵欄位類型

        identity 類型只用於主鍵本身，參照 identity 主鍵的外鍵使用一般整數類型。
        """
        id_type = self.key_id_type(entity, attribute)
        if id_type is IdType.LONG_IDENTITY:
            return self.catalog.long_identity_type if attribute.is_id else self.catalog.resolve_physical_type("Long")
        if id_type is IdType.INTEGER_IDENTITY:
            return (
                self.catalog.integer_identity_type if attribute.is_id
                else self.catalog.resolve_physical_type("Integer")
            )
        return self.catalog.resolve_physical_type(id_type.value)

    def primary_or_foreign_key_params(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        not_null: bool,
    ) -> str:
        params = ""
        if self.key_id_type(entity, attribute) is IdType.STRING:
            params = f"({attribute.length or DEFAULT_STRING_KEY_LENGTH})"
        if not_null and (attribute.is_id or attribute.is_mandatory):
            params += " not null"
        return params

    def transitional_default(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> Optional[str]:
        """
        新增必填欄位時用來回填既有資料列的預設值

        參照欄位沒有合理的預設值，返回 None。
        """
        if attribute.is_class or attribute.is_id:
            return None
        if attribute.is_enum:
            return self.catalog.resolve_default_value(attribute.enum_id_type or "String")
        return self.catalog.resolve_default_value(attribute.type.class_name)
