"""
實體/屬性描述模組

以明確的值物件描述編譯器實際讀取的實體與屬性欄位，取代動態屬性存取。
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidAttributeConfigurationError


class IdType(str, Enum):
    """實體主鍵類型"""
    UUID = "UUID"
    LONG = "Long"
    INTEGER = "Integer"
    STRING = "String"
    LONG_IDENTITY = "LongIdentity"
    INTEGER_IDENTITY = "IntegerIdentity"

    @property
    def is_identity(self) -> bool:
        return self in (IdType.LONG_IDENTITY, IdType.INTEGER_IDENTITY)


@dataclass(frozen=True)
class TypeDescriptor:
    """
    屬性類型描述

    Attributes:
        fqn: 完整類別名稱，例如 'java.lang.String'
        class_name: 簡單類別名稱，例如 'String'，作為邏輯類型的鍵
    """
    fqn: str
    class_name: str

    @classmethod
    def of(cls, class_name: str, package: str = "java.lang") -> "TypeDescriptor":
        return cls(fqn=f"{package}.{class_name}" if package else class_name, class_name=class_name)

    @property
    def is_text(self) -> bool:
        return self.fqn in ("java.lang.String", "java.lang.Character")

    @property
    def is_decimal(self) -> bool:
        return self.fqn == "java.math.BigDecimal"


@dataclass(frozen=True)
class ColumnDefinition:
    """
    欄位定義

    既可表示由屬性推導的目標狀態，也可表示從資料庫讀到的現況。

    Attributes:
        type: 實體欄位類型
        length: 長度 (None 表示未指定或不適用)
        precision: 精度
        scale: 小數位數
        nullable: 是否允許 NULL
        default: 預設值字面值
    """
    type: str
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    nullable: bool = True
    default: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnDefinition":
        valid_fields = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in valid_fields})


@dataclass(frozen=True)
class AttributeDescriptor:
    """
    屬性描述

    Attributes:
        name: 屬性名稱
        type: 屬性類型
        is_id: 是否為主鍵
        is_mandatory: 是否必填 (not null)
        is_class: 是否為指向其他實體的參照 (外鍵)
        is_embedded: 是否為嵌入屬性，欄位展開為 embedded_attributes
        is_enum: 是否為列舉
        enum_id_type: 列舉的儲存類型 ('String' 或 'Integer')
        length: 文字長度，None 表示不限 (max)
        precision: decimal 精度
        scale: decimal 小數位數
        column: 明確指定的欄位名稱
        column_prefix: 嵌入屬性的欄位名稱前綴
        embedded_attributes: 嵌入屬性的子屬性
        references: 參照實體的表格名稱 (僅 is_class)
        reference_column: 參照表格的主鍵欄位
        reference_id_type: 參照實體的主鍵類型，決定外鍵欄位類型
    """
    name: str
    type: TypeDescriptor
    is_id: bool = False
    is_mandatory: bool = False
    is_class: bool = False
    is_embedded: bool = False
    is_enum: bool = False
    enum_id_type: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    column: Optional[str] = None
    column_prefix: Optional[str] = None
    embedded_attributes: Tuple["AttributeDescriptor", ...] = ()
    references: Optional[str] = None
    reference_column: str = "ID"
    reference_id_type: IdType = IdType.UUID

    def __post_init__(self):
        if self.is_embedded and not self.embedded_attributes:
            raise InvalidAttributeConfigurationError(
                self.name, f"嵌入屬性 '{self.name}' 沒有任何子屬性"
            )
        object.__setattr__(self, "embedded_attributes", tuple(self.embedded_attributes))
        object.__setattr__(self, "reference_id_type", IdType(self.reference_id_type))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttributeDescriptor":
        """
        從字典建立屬性描述 (例如由 YAML 讀入的模型)

        Example:
            >>> AttributeDescriptor.from_dict({
            ...     "name": "title",
            ...     "type": {"fqn": "java.lang.String", "class_name": "String"},
            ...     "length": 100,
            ... })
        """
        data = dict(data)
        type_data = data.pop("type")
        if isinstance(type_data, str):
            type_descriptor = TypeDescriptor.of(type_data)
        else:
            type_descriptor = TypeDescriptor(**type_data)
        embedded = tuple(cls.from_dict(d) for d in data.pop("embedded_attributes", ()))
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(type=type_descriptor, embedded_attributes=embedded, **filtered)


def _to_column_name(attribute_name: str) -> str:
    """camelCase 屬性名稱轉為大寫底線欄位名稱"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', attribute_name).upper()


@dataclass(frozen=True)
class EntityDescriptor:
    """
    實體描述

    Attributes:
        name: 實體名稱
        table: 表格名稱
        attributes: 屬性列表
        id_type: 主鍵類型
        soft_delete: 是否使用 DELETE_TS 軟刪除
    """
    name: str
    table: str
    attributes: Tuple[AttributeDescriptor, ...] = ()
    id_type: IdType = IdType.UUID
    soft_delete: bool = False

    def __post_init__(self):
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "id_type", IdType(self.id_type))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityDescriptor":
        data = dict(data)
        attributes = tuple(AttributeDescriptor.from_dict(a) for a in data.pop("attributes", ()))
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(attributes=attributes, **filtered)

    def column_name(self, attribute: AttributeDescriptor) -> str:
        """
        取得屬性對應的欄位名稱

        未明確指定時由屬性名稱推導，參照屬性加上 _ID 後綴。
        """
        if attribute.column:
            return attribute.column
        column = _to_column_name(attribute.name)
        if attribute.is_class:
            column += "_ID"
        return column

    @property
    def id_attribute(self) -> AttributeDescriptor:
        """
        Raises:
            InvalidAttributeConfigurationError: 實體沒有主鍵屬性
        """
        for attribute in self.attributes:
            if attribute.is_id:
                return attribute
        raise InvalidAttributeConfigurationError(
            "<id>", f"實體 '{self.name}' 沒有主鍵屬性", table=self.table
        )

    def attribute(self, name: str) -> AttributeDescriptor:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        raise InvalidAttributeConfigurationError(name, f"實體 '{self.name}' 沒有屬性 '{name}'", table=self.table)
