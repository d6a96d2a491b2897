"""
欄位相容性判斷模組

CompatibilityChecker 只包含純函數：所有判斷都只依賴傳入的值與不可變的
方言目錄，沒有隱藏狀態，可在多個遷移執行之間共用。

精度/小數位數兩邊皆為 0 或未指定時一律判定為「沒有差異」。這是刻意的
近似處理，不視為錯誤。
"""

from typing import Optional

from .catalog import TypeCatalog
from .model import AttributeDescriptor


class CompatibilityChecker:
    """
    欄位差異判斷器

    Example:
        >>> checker = CompatibilityChecker(ACCESS_CATALOG)
        >>> checker.is_precision_different(19, 0, "money")
        False
        >>> checker.is_type_different(attr, "varchar", "char", 5)
        False
    """

    def __init__(self, catalog: TypeCatalog):
        self.catalog = catalog

    def is_precision_different(self, attr_precision: int, column_precision: int, column_type: str) -> bool:
        """
        BigDecimal 屬性的精度是否與欄位不同

        貨幣類型的精度固定，只與固定值比較，忽略欄位回報的精度。
        屬性未指定精度 (0) 時，欄位的方言預設精度視為相同。
        """
        attr_precision = attr_precision or 0
        currency_precision = self.catalog.numeric.currency_precisions.get(column_type.lower())
        if currency_precision is not None:
            return attr_precision != currency_precision

        column_precision = column_precision or 0
        if column_precision == attr_precision:
            return False
        return not (
            attr_precision == 0
            and column_precision == self.catalog.numeric.default_decimal_precision
        )

    def is_scale_different(self, attr_scale: int, column_scale: int, column_type: str) -> bool:
        """
        BigDecimal 屬性的小數位數是否與欄位不同

        近似數值欄位會回報低於下限的負小數位數，對未指定小數位數的屬性視為相同。
        """
        attr_scale = attr_scale or 0
        if self.catalog.is_currency_type(column_type):
            return attr_scale != self.catalog.numeric.currency_scale

        column_scale = column_scale or 0
        if column_scale == attr_scale:
            return False
        return not (
            attr_scale == 0 and column_scale <= self.catalog.numeric.min_column_scale
        )

    def is_type_different(
        self,
        attribute: Optional[AttributeDescriptor],
        current_type: str,
        old_type: str,
        old_length: int,
    ) -> bool:
        """
        目前的欄位類型是否與舊類型不同且不相容

        定長文字類型 (char/nchar) 轉為 varchar 且舊長度大於 1 時只是加寬，
        不算類型變更。其他情況交給 types_equivalent 判斷。
        """
        if (
            old_type.lower() in self.catalog.fixed_char_types
            and current_type.lower() == self.catalog.varchar_type
            and (old_length or 0) > 1
        ):
            return False
        return not self.types_equivalent(current_type, old_type)

    def types_equivalent(self, type1: str, type2: str) -> bool:
        """名稱相同 (不分大小寫) 或屬於同一同義類別的兩個類型視為相同"""
        if type1.strip().lower() == type2.strip().lower():
            return True
        synonym_class = self.catalog.synonym_class_of(type1.strip())
        return synonym_class is not None and type2.strip() in synonym_class

    def is_length_different(
        self,
        attr_length: Optional[int],
        column_length: Optional[int],
        column_type: str,
    ) -> bool:
        """
        文字屬性的長度是否與欄位不同

        屬性未指定長度代表不限 (max)，與回報方言長度上限的欄位視為相同。
        """
        max_length = self.catalog.max_length(column_type)
        attr_length = attr_length or max_length
        column_length = column_length or max_length
        return attr_length != column_length

    @staticmethod
    def is_mandatory_different(attr_mandatory: bool, column_nullable: bool, is_id: bool = False) -> bool:
        """主鍵欄位本身即為 not null，永遠不回報差異"""
        if is_id:
            return False
        return bool(attr_mandatory) == bool(column_nullable)
