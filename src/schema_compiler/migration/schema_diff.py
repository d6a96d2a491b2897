"""
屬性差異比對模組

比對屬性推導的目標欄位定義與資料庫目前的欄位定義，判斷需要的變更類型。
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..model import ColumnDefinition


class ChangeType(Enum):
    """變更類型"""
    NO_CHANGE = "no_change"   # 不需要任何語句
    ALTER = "alter"           # 原地修改欄位
    REBUILD = "rebuild"       # 刪除後重新建立欄位 (資料遺失)


def describe_column(column: Optional[ColumnDefinition]) -> str:
    """欄位定義的簡短描述，例如 'varchar(50) not null'"""
    if column is None:
        return "<none>"
    text = column.type
    if column.length:
        text += f"({column.length})"
    elif column.precision:
        text += f"({column.precision}, {column.scale or 0})"
    if not column.nullable:
        text += " not null"
    return text


@dataclass
class AttributeDiff:
    """
    單一屬性的差異結果

    Attributes:
        table: 表格名稱
        column: 欄位名稱
        desired: 由屬性推導的目標欄位定義
        current: 資料庫目前的欄位定義
        type_changed: 類型不同且不相容
        length_changed: 文字長度不同
        precision_changed: decimal 精度不同
        scale_changed: decimal 小數位數不同
        mandatory_changed: 必填設定與欄位的 nullable 不一致
    """
    table: str
    column: str
    desired: ColumnDefinition
    current: Optional[ColumnDefinition] = None
    type_changed: bool = False
    length_changed: bool = False
    precision_changed: bool = False
    scale_changed: bool = False
    mandatory_changed: bool = False

    @property
    def change_type(self) -> ChangeType:
        """類型變更一律重建，其他差異原地修改"""
        if self.type_changed:
            return ChangeType.REBUILD
        if self.length_changed or self.decimal_changed or self.mandatory_changed:
            return ChangeType.ALTER
        return ChangeType.NO_CHANGE

    @property
    def decimal_changed(self) -> bool:
        return self.precision_changed or self.scale_changed

    @property
    def has_changes(self) -> bool:
        return self.change_type is not ChangeType.NO_CHANGE

    @property
    def changed_dimensions(self) -> List[str]:
        flags = [
            ("type", self.type_changed),
            ("length", self.length_changed),
            ("precision", self.precision_changed),
            ("scale", self.scale_changed),
            ("mandatory", self.mandatory_changed),
        ]
        return [name for name, changed in flags if changed]

    def __str__(self) -> str:
        if not self.has_changes:
            return f"= {self.column}"
        marker = "!" if self.change_type is ChangeType.REBUILD else "~"
        return (
            f"{marker} {self.column}: {describe_column(self.current)} -> {describe_column(self.desired)} "
            f"[{', '.join(self.changed_dimensions)}]"
        )

    def report(self) -> str:
        """
        生成差異報告

        Returns:
            str: 格式化的差異報告
        """
        if not self.has_changes:
            return f"Attribute Diff for '{self.table}.{self.column}': No changes"

        lines = [
            f"Attribute Diff for '{self.table}.{self.column}':",
            f"  {self}",
            f"  Change type: {self.change_type.value}",
        ]
        if self.change_type is ChangeType.REBUILD:
            lines.append("  Status: REQUIRES REVIEW (column is dropped and re-created)")
        else:
            lines.append("  Status: SAFE (altered in place)")
        return "\n".join(lines)
