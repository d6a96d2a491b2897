"""
方言類型目錄模組

TypeCatalog 是不可變的方言配置值物件，在方言初始化時建立一次，
之後只讀，可在多個執行緒之間共用而不需要鎖。
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..exceptions import CatalogConfigurationError, UnknownLogicalTypeError
from ..utils.quoting import IdentifierQuoter

# Java Integer.MAX_VALUE, 一般文字欄位的長度上限
INTEGER_MAX = 2147483647

# 寬字元 (每字元 2 bytes) 文字欄位的長度上限
WIDE_CHAR_MAX = 1073741823


class TemporalCategory(Enum):
    """欄位類型對應的時間類別"""
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    NONE = "NONE"


@dataclass(frozen=True)
class SynonymClass:
    """
    同義類型集合

    同一集合內的實體類型在比對差異時視為相同。成員以宣告順序保存，
    名稱一律轉為小寫。
    """
    members: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(m.lower() for m in self.members))

    def __contains__(self, column_type: object) -> bool:
        return isinstance(column_type, str) and column_type.lower() in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def as_set(self) -> FrozenSet[str]:
        return frozenset(self.members)


@dataclass(frozen=True)
class NumericRules:
    """
    數值欄位的方言規則

    Attributes:
        currency_precisions: 貨幣類型的固定精度 (不可覆寫)
        currency_scale: 貨幣類型的固定小數位數
        default_decimal_precision: 未指定精度時 decimal 欄位的預設精度
        min_column_scale: 近似數值欄位回報的負小數位數下限
    """
    currency_precisions: Mapping[str, int] = field(
        default_factory=lambda: {"money": 19, "smallmoney": 10}
    )
    currency_scale: int = 4
    default_decimal_precision: int = 18
    min_column_scale: int = -84

    def __post_init__(self):
        object.__setattr__(
            self,
            "currency_precisions",
            MappingProxyType({k.lower(): v for k, v in self.currency_precisions.items()}),
        )


SynonymInput = Union[SynonymClass, Iterable[str]]


def _lower_set(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(v.lower() for v in values)


@dataclass(frozen=True, eq=False)
class TypeCatalog:
    """
    方言類型目錄

    Attributes:
        name: 方言名稱
        types: 邏輯類型 (屬性類型的簡單類別名稱) -> 實體欄位類型
        default_values: 邏輯類型 -> 欄位預設值字面值
        temporal_types: 時間類別 ('DATE'/'TIME'/'TIMESTAMP') -> 實體欄位類型
        synonym_classes: 同義類型集合，彼此不可重疊
        reserved_words: 方言保留字
        no_parameter_types: DDL 中不可帶長度/精度參數的類型
        auto_generated_types: 由 DBMS 自動填值、不對應邏輯類型的類型
        wide_char_types: 使用寬字元長度上限的文字類型
        fixed_char_types: 定長文字類型，轉為 varchar_type 時視為免費加寬
        numeric: 數值欄位規則
        delimiter: 每個語句結尾的分隔記號
        sequence_terminator: 序列模擬語句的結尾記號
    """
    name: str
    types: Mapping[str, str]
    temporal_types: Mapping[str, str]
    synonym_classes: Tuple[SynonymInput, ...] = ()
    default_values: Mapping[str, str] = field(default_factory=dict)
    reserved_words: FrozenSet[str] = frozenset()
    no_parameter_types: FrozenSet[str] = frozenset()
    auto_generated_types: FrozenSet[str] = frozenset()
    wide_char_types: FrozenSet[str] = frozenset({"nchar", "nvarchar", "ntext"})
    fixed_char_types: FrozenSet[str] = frozenset({"char", "nchar"})
    varchar_type: str = "varchar"
    numeric: NumericRules = field(default_factory=NumericRules)
    long_identity_type: str = "bigint identity"
    integer_identity_type: str = "int identity"
    delimiter: str = "^"
    sequence_terminator: str = ";"
    quote_open: str = "["
    quote_close: str = "]"

    def __post_init__(self):
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))
        object.__setattr__(self, "default_values", MappingProxyType(dict(self.default_values)))
        object.__setattr__(
            self,
            "temporal_types",
            MappingProxyType({k.upper(): v.lower() for k, v in self.temporal_types.items()}),
        )
        object.__setattr__(self, "reserved_words", frozenset(w.upper() for w in self.reserved_words))
        object.__setattr__(self, "no_parameter_types", _lower_set(self.no_parameter_types))
        object.__setattr__(self, "auto_generated_types", _lower_set(self.auto_generated_types))
        object.__setattr__(self, "wide_char_types", _lower_set(self.wide_char_types))
        object.__setattr__(self, "fixed_char_types", _lower_set(self.fixed_char_types))

        unknown = set(self.temporal_types) - {c.value for c in TemporalCategory if c is not TemporalCategory.NONE}
        if unknown:
            raise CatalogConfigurationError(
                "temporal_types", f"方言 '{self.name}' 含有未知的時間類別: {sorted(unknown)}"
            )

        classes = tuple(
            c if isinstance(c, SynonymClass) else SynonymClass(tuple(c))
            for c in self.synonym_classes
        )
        index: Dict[str, SynonymClass] = {}
        for synonym_class in classes:
            for member in synonym_class:
                if member in index:
                    raise CatalogConfigurationError(
                        "synonym_classes",
                        f"方言 '{self.name}' 的類型 '{member}' 同時出現在多個同義類別中",
                    )
                index[member] = synonym_class
        object.__setattr__(self, "synonym_classes", classes)
        object.__setattr__(self, "_synonym_index", MappingProxyType(index))

    # ========== 邏輯類型對應 ==========

    def resolve_physical_type(self, logical_type: str) -> str:
        """
        取得邏輯類型對應的實體欄位類型

        Raises:
            UnknownLogicalTypeError: 方言未定義該邏輯類型
        """
        try:
            return self.types[logical_type]
        except KeyError:
            raise UnknownLogicalTypeError(logical_type, self.name) from None

    def resolve_default_value(self, logical_type: str) -> Optional[str]:
        """方言沒有該類型的預設值慣例時返回 None，呼叫端需省略 default 子句"""
        return self.default_values.get(logical_type)

    # ========== 實體類型查詢 ==========

    def synonym_class_of(self, column_type: str) -> Optional[SynonymClass]:
        return self._synonym_index.get(column_type.lower())

    def synonyms_of(self, column_type: str) -> FrozenSet[str]:
        """返回所屬的同義類別，不屬於任何類別時返回空集合"""
        synonym_class = self.synonym_class_of(column_type)
        return synonym_class.as_set() if synonym_class else frozenset()

    def temporal_category_of(self, column_type: str) -> TemporalCategory:
        """
        判斷欄位類型對應的時間類別

        先比對類型名稱本身，再依宣告順序比對其同義類型，第一個符合者為準。
        多個時間類別對應到同一實體類型時，該類型保存完整時間戳記，
        結果為 TIMESTAMP。
        """
        lowered = column_type.lower()
        for category in TemporalCategory:
            if category is not TemporalCategory.NONE and lowered == category.value.lower():
                return category

        found = self._temporal_by_value(lowered)
        if found is not TemporalCategory.NONE:
            return found

        synonym_class = self.synonym_class_of(lowered)
        for synonym in synonym_class or ():
            found = self._temporal_by_value(synonym)
            if found is not TemporalCategory.NONE:
                return found
        return TemporalCategory.NONE

    def _temporal_by_value(self, column_type: str) -> TemporalCategory:
        matches = [k for k, v in self.temporal_types.items() if v == column_type]
        if not matches:
            return TemporalCategory.NONE
        if len(matches) > 1:
            return TemporalCategory.TIMESTAMP
        return TemporalCategory(matches[0])

    def is_no_parameter_type(self, column_type: str) -> bool:
        return column_type.lower() in self.no_parameter_types

    def is_auto_generated(self, column_type: str) -> bool:
        return column_type.lower() in self.auto_generated_types

    def is_currency_type(self, column_type: str) -> bool:
        return column_type.lower() in self.numeric.currency_precisions

    def max_length(self, column_type: str) -> int:
        """可變長度文字欄位的方言長度上限"""
        if column_type.lower() in self.wide_char_types:
            return WIDE_CHAR_MAX
        return INTEGER_MAX

    @property
    def timestamp_type(self) -> str:
        return self.temporal_types.get(TemporalCategory.TIMESTAMP.value, "timestamp")

    @cached_property
    def quoter(self) -> IdentifierQuoter:
        return IdentifierQuoter(self.reserved_words, self.quote_open, self.quote_close)

    # ========== 衍生目錄 ==========

    def with_overrides(
        self,
        types: Optional[Mapping[str, str]] = None,
        default_values: Optional[Mapping[str, str]] = None,
    ) -> "TypeCatalog":
        """
        建立覆寫部分對應的新目錄，原目錄不變

        Example:
            >>> catalog = ACCESS_CATALOG.with_overrides(types={"Long": "bigint"})
        """
        return replace(
            self,
            types={**self.types, **(types or {})},
            default_values={**self.default_values, **(default_values or {})},
        )
