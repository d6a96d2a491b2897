"""
實體模型描述

編譯器只透過這些值物件讀取實體模型，不直接依賴應用程式的物件模型。
"""

from .descriptors import (
    IdType,
    TypeDescriptor,
    ColumnDefinition,
    AttributeDescriptor,
    EntityDescriptor,
)

__all__ = [
    "IdType",
    "TypeDescriptor",
    "ColumnDefinition",
    "AttributeDescriptor",
    "EntityDescriptor",
]
