"""
DDL 語句產生器

StatementBuilder 依方言目錄與預設行為策略產生每一種結構操作的 DDL 文字。
產生器本身沒有可變狀態；需要查詢資料庫的操作 (刪除欄位/表格前的約束)
透過傳入的 MetadataProvider 取得資訊。
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from ..catalog import TypeCatalog
from ..config import CompilerConfig
from ..exceptions import InvalidAttributeConfigurationError, UnknownLogicalTypeError
from ..metadata.provider import MetadataProvider
from ..model import AttributeDescriptor, EntityDescriptor, IdType, TypeDescriptor
from ..utils.logging import get_component_logger, log_statements
from ..utils.quoting import escape_string
from .defaults import DefaultBehaviors
from .statement import Statement, StatementCategory

INDENT = "    "


class StatementBuilder:
    """
    DDL 語句產生器

    所有語句以方言分隔記號結尾，識別符轉為大寫並在需要時加上方言引號。

    Example:
        >>> builder = StatementBuilder(ACCESS_CATALOG)
        >>> builder.drop_column_statement("CUSTOMER", "NAME")
        'alter table CUSTOMER drop column NAME ^'
        >>> builder.create_sequence_statement("order_seq", 1, 1)
        'create table ORDER_SEQ (ID bigint identity(1,1), CREATE_TS datetime) ;'
    """

    def __init__(
        self,
        catalog: TypeCatalog,
        defaults: Optional[DefaultBehaviors] = None,
        config: Optional[CompilerConfig] = None,
    ):
        self.catalog = catalog
        self.config = config or CompilerConfig(dialect=catalog.name)
        self.defaults = defaults or DefaultBehaviors(catalog, self.config)
        self.quoter = catalog.quoter
        self.logger = get_component_logger("builder", self.config)

    # ========== 內部工具 ==========

    def _id(self, name: str) -> str:
        return self.quoter.normalize(name)

    def _stmt(self, body: str, category: StatementCategory) -> Statement:
        return Statement(f"{body} {self.catalog.delimiter}", category)

    def _resolve(self, logical_type: str, entity: EntityDescriptor, attribute: AttributeDescriptor) -> str:
        try:
            return self.catalog.resolve_physical_type(logical_type)
        except UnknownLogicalTypeError as e:
            raise UnknownLogicalTypeError(
                e.logical_type, e.dialect, attribute=attribute.name, table=entity.table
            ) from None

    def _require_scalar(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> None:
        if attribute.is_embedded:
            raise InvalidAttributeConfigurationError(
                attribute.name,
                f"嵌入屬性 '{attribute.name}' 沒有單一欄位類型",
                table=entity.table,
            )

    def expand_attribute(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        prefix: str = "",
    ) -> Iterator[Tuple[AttributeDescriptor, str]]:
        """將屬性展開為 (純量屬性, 欄位名稱)，嵌入屬性遞迴展開"""
        if not attribute.is_embedded:
            yield attribute, prefix + entity.column_name(attribute)
            return
        child_prefix = prefix + (attribute.column_prefix or "")
        for child in attribute.embedded_attributes:
            yield from self.expand_attribute(entity, child, child_prefix)

    # ========== 欄位類型 ==========

    def column_type(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> str:
        """
        屬性對應的欄位類型

        Raises:
            InvalidAttributeConfigurationError: 嵌入屬性
            UnknownLogicalTypeError: 方言未定義屬性的邏輯類型
        """
        self._require_scalar(entity, attribute)
        if attribute.is_id or attribute.is_class:
            return self.primary_or_foreign_key_type(entity, attribute)
        if attribute.is_enum:
            return self._resolve(attribute.enum_id_type or "String", entity, attribute)
        return self._resolve(attribute.type.class_name, entity, attribute)

    def primary_or_foreign_key_type(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> str:
        try:
            return self.defaults.primary_or_foreign_key_type(entity, attribute)
        except UnknownLogicalTypeError as e:
            raise UnknownLogicalTypeError(
                e.logical_type, e.dialect, attribute=attribute.name, table=entity.table
            ) from None

    def primary_or_foreign_key_params(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        not_null: bool = True,
    ) -> str:
        return self.defaults.primary_or_foreign_key_params(entity, attribute, not_null)

    @staticmethod
    def is_string_enum(attribute: AttributeDescriptor) -> bool:
        return attribute.is_enum and (attribute.enum_id_type or "String") == "String"

    def text_column_length(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> Optional[int]:
        """
        文字或字串列舉欄位的長度

        字串列舉使用列舉欄位長度；文字屬性未指定長度時返回 None，代表 max。
        """
        if self.is_string_enum(attribute):
            return self.defaults.enum_column_length()
        return self.defaults.column_length(entity, attribute)

    def column_parameters(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        not_null: bool = True,
    ) -> str:
        """
        欄位參數，例如 '(100)'、'(max)'、'(19, 2) not null'

        不帶參數的類型不會出現長度/精度，但必填且要求時仍會加上 not null。
        """
        if attribute.is_id or attribute.is_class:
            return self.primary_or_foreign_key_params(entity, attribute, not_null)

        params = ""
        if not self.catalog.is_no_parameter_type(self.column_type(entity, attribute)):
            if attribute.type.is_text or self.is_string_enum(attribute):
                length = self.text_column_length(entity, attribute)
                params = f"({length})" if length else "(max)"
            elif attribute.type.is_decimal:
                params = f"({self.defaults.decimal_params(entity, attribute)})"

        if attribute.is_mandatory and not_null:
            params += " not null"
        return params

    def _column_spec(self, entity: EntityDescriptor, attribute: AttributeDescriptor, not_null: bool) -> str:
        return self.column_type(entity, attribute) + self.column_parameters(entity, attribute, not_null)

    def column_definition(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        column: Optional[str] = None,
        not_null: bool = True,
    ) -> str:
        """
        欄位定義，例如 'TITLE varchar(100) not null'
        """
        column = column or entity.column_name(attribute)
        return f"{self._id(column)} {self._column_spec(entity, attribute, not_null)}"

    # ========== 表格 ==========

    def create_table_statement(self, entity: EntityDescriptor) -> Statement:
        """
        建立表格語句，主鍵以表格內約束宣告
        """
        lines = []
        for attribute in entity.attributes:
            for scalar, column in self.expand_attribute(entity, attribute):
                lines.append(INDENT + self.column_definition(entity, scalar, column, not_null=True))
        lines.append(INDENT + self.primary_key_statement(entity))

        body = f"create table {self._id(entity.table)} (\n" + ",\n".join(lines) + "\n)"
        return self._stmt(body, StatementCategory.CREATE)

    def drop_table_statement(self, table: str) -> Statement:
        return self._stmt(f"drop table {self._id(table)}", StatementCategory.DROP)

    def drop_table_constraint_statements(self, provider: MetadataProvider, table: str) -> List[Statement]:
        """刪除表格前需要先刪除的外鍵約束"""
        with provider.connection_scope():
            constraints = provider.list_foreign_key_constraints(table)
        statements = [self.drop_constraint_statement(table, c.name) for c in constraints]
        log_statements(self.logger, statements, self.config.enable_statement_logging)
        return statements

    # ========== 新增欄位 ==========

    def add_column_statements(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        column: Optional[str] = None,
        table_has_rows: bool = True,
    ) -> List[Statement]:
        """
        新增欄位語句

        嵌入屬性展開為每個子屬性各自的新增語句。必填欄位加到已有資料的表格時，
        依序產生: 以可為 NULL 新增 -> 以過渡預設值回填 -> 改為 not null；
        方言沒有該類型的過渡預設值時省略回填語句。
        """
        if attribute.is_embedded:
            statements: List[Statement] = []
            for scalar, scalar_column in self.expand_attribute(entity, attribute):
                statements.extend(self.add_column_statements(entity, scalar, scalar_column, table_has_rows))
            return statements

        column = column or entity.column_name(attribute)
        table = self._id(entity.table)

        if attribute.is_id or not attribute.is_mandatory or not table_has_rows:
            definition = self.column_definition(entity, attribute, column, not_null=True)
            return [self._stmt(f"alter table {table} add {definition}", StatementCategory.ALTER)]

        statements = [
            self._stmt(
                f"alter table {table} add {self.column_definition(entity, attribute, column, not_null=False)}",
                StatementCategory.ALTER,
            )
        ]
        default = self.defaults.transitional_default(entity, attribute)
        if default is not None:
            statements.append(self.fill_null_values_statement(entity.table, column, default))
        else:
            self.logger.warning(
                f"{entity.table}.{column} 沒有過渡預設值，既有資料列需先填值才能設為 not null"
            )
        statements.append(
            self.alter_column_mandatory_statement(
                entity.table, column, self._column_spec(entity, attribute, not_null=False), True
            )
        )
        return statements

    def fill_null_values_statement(self, table: str, column: str, value: str) -> Statement:
        """以字面值回填欄位中的 NULL"""
        col = self._id(column)
        return self._stmt(
            f"update {self._id(table)} set {col} = {value} where {col} is null", StatementCategory.UPDATE
        )

    def add_column_by_type_statement(
        self,
        table: str,
        column: str,
        type_descriptor: TypeDescriptor,
        not_null: bool = False,
    ) -> Statement:
        """
        以屬性類型直接新增欄位 (不經過屬性描述)

        Raises:
            UnknownLogicalTypeError: 方言未定義該類型，錯誤帶有表格與欄位名稱
        """
        try:
            column_type = self.catalog.resolve_physical_type(type_descriptor.class_name)
        except UnknownLogicalTypeError as e:
            raise UnknownLogicalTypeError(
                e.logical_type, e.dialect, attribute=column.upper(), table=table.upper()
            ) from None
        suffix = " not null" if not_null else ""
        return self._stmt(
            f"alter table {self._id(table)} add {self._id(column)} {column_type}{suffix}",
            StatementCategory.ALTER,
        )

    # ========== 刪除欄位 ==========

    def drop_column_statement(self, table: str, column: str) -> Statement:
        return self._stmt(
            f"alter table {self._id(table)} drop column {self._id(column)}", StatementCategory.DROP
        )

    def _is_managed_index(self, index_name: str, is_unique: bool) -> bool:
        prefix = self.config.managed_index_prefix
        return bool(is_unique and prefix and index_name.upper().startswith(prefix.upper()))

    def drop_column_dependency_statements(
        self,
        provider: MetadataProvider,
        table: str,
        column: str,
    ) -> List[Statement]:
        """
        刪除欄位前需要先刪除的外鍵、預設值約束與索引

        以受管前綴命名的唯一索引由唯一索引更新流程處理，不在此刪除。
        """
        with provider.connection_scope():
            foreign_keys = provider.list_foreign_key_constraints(table, column)
            default_constraints = provider.list_default_constraints(table, column)
            indexes = provider.list_indexes_for_column(table, column)

        statements = [self.drop_constraint_statement(table, c.name) for c in foreign_keys]
        statements.extend(self.drop_constraint_statement(table, c.name) for c in default_constraints)
        statements.extend(
            self.drop_index_statement(table, index.name)
            for index in indexes
            if not self._is_managed_index(index.name, index.is_unique)
        )
        if statements:
            self.logger.debug(f"{table}.{column} 有 {len(statements)} 個依賴需先刪除")
            log_statements(self.logger, statements, self.config.enable_statement_logging)
        return statements

    def drop_column_statements(self, provider: MetadataProvider, table: str, column: str) -> List[Statement]:
        """刪除欄位以及依賴它的約束與索引"""
        statements = self.drop_column_dependency_statements(provider, table, column)
        statements.append(self.drop_column_statement(table, column))
        return statements

    # ========== 修改欄位 ==========

    def alter_column_length_statement(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        new_type: str,
        column: Optional[str] = None,
    ) -> Statement:
        col = self._id(column or entity.column_name(attribute))
        length = self.text_column_length(entity, attribute)
        return self._stmt(
            f"alter table {self._id(entity.table)} alter column {col} {new_type}({length or 'max'})",
            StatementCategory.ALTER,
        )

    def alter_column_decimal_params_statement(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        new_type: str,
        column: Optional[str] = None,
    ) -> Statement:
        col = self._id(column or entity.column_name(attribute))
        params = self.defaults.decimal_params(entity, attribute)
        return self._stmt(
            f"alter table {self._id(entity.table)} alter column {col} {new_type}({params})",
            StatementCategory.ALTER,
        )

    def alter_column_type_statement(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        new_type: str,
        column: Optional[str] = None,
    ) -> Statement:
        col = self._id(column or entity.column_name(attribute))
        return self._stmt(
            f"alter table {self._id(entity.table)} alter column {col} {new_type}", StatementCategory.ALTER
        )

    def alter_column_mandatory_statement(
        self,
        table: str,
        column: str,
        column_def: str,
        is_mandatory: bool,
    ) -> Statement:
        """
        Example:
            >>> builder.alter_column_mandatory_statement("CUSTOMER", "AGE", "int", True)
            'alter table CUSTOMER alter column AGE int not null ^'
        """
        suffix = " not null" if is_mandatory else ""
        return self._stmt(
            f"alter table {self._id(table)} alter column {self._id(column)} {column_def}{suffix}",
            StatementCategory.ALTER,
        )

    def alter_column_mandatory_statements(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        column: Optional[str] = None,
    ) -> List[Statement]:
        """
        依屬性的必填設定修改欄位

        主鍵欄位本來就是 not null，不產生語句。取消 not null 時重述完整欄位定義。
        """
        if attribute.is_id:
            return []
        definition = self.column_definition(entity, attribute, column, not_null=True)
        return [
            self._stmt(f"alter table {self._id(entity.table)} alter column {definition}", StatementCategory.ALTER)
        ]

    # ========== 重新命名 ==========

    def rename_table_statement(self, old_table: str, new_table: str) -> Statement:
        old, new = escape_string(old_table.upper()), escape_string(new_table.upper())
        return Statement(f"sp_rename '{old}', '{new}' {self.catalog.delimiter}\n", StatementCategory.RENAME)

    def rename_column_statement(self, table: str, old_column: str, new_column: str) -> Statement:
        table, old = escape_string(table.upper()), escape_string(old_column.upper())
        new = escape_string(new_column.upper())
        return Statement(
            f"exec sp_rename '{table}.{old}', '{new}', 'COLUMN' {self.catalog.delimiter}\n",
            StatementCategory.RENAME,
        )

    # ========== 主鍵/外鍵 ==========

    def primary_key_statement(self, entity: EntityDescriptor) -> str:
        """
        表格內的主鍵宣告

        UUID 主鍵以隨機順序插入，使用 nonclustered 避免索引碎片。
        """
        column = self._id(entity.column_name(entity.id_attribute))
        if entity.id_type is IdType.UUID:
            return f"primary key nonclustered ({column})"
        return f"primary key ({column})"

    def primary_key_constraint_statements(self, entity: EntityDescriptor, not_null: bool = True) -> List[Statement]:
        """
        將既有欄位設為主鍵

        identity 主鍵由資料庫產生值且本來就是 not null，其餘主鍵在加上約束前
        先改為 not null。
        """
        id_attribute = entity.id_attribute
        column = entity.column_name(id_attribute)
        statements = []
        if not_null and not entity.id_type.is_identity:
            statements.append(
                self.alter_column_mandatory_statement(
                    entity.table, column, self._column_spec(entity, id_attribute, not_null=False), True
                )
            )

        nonclustered = "nonclustered " if entity.id_type is IdType.UUID else ""
        table = self._id(entity.table)
        statements.append(
            self._stmt(
                f"alter table {table} add constraint {self._id('PK_' + entity.table)} "
                f"primary key {nonclustered}({self._id(column)})",
                StatementCategory.ALTER,
            )
        )
        return statements

    def foreign_key_name(self, table: str, column: str) -> str:
        return self._id(f"FK_{table}_{column}")

    def add_foreign_key_statement(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        column: Optional[str] = None,
    ) -> Statement:
        """
        Raises:
            InvalidAttributeConfigurationError: 屬性不是參照屬性
        """
        if not attribute.is_class or not attribute.references:
            raise InvalidAttributeConfigurationError(
                attribute.name, f"屬性 '{attribute.name}' 不是參照其他表格的屬性", table=entity.table
            )
        column = column or entity.column_name(attribute)
        return self._stmt(
            f"alter table {self._id(entity.table)} add constraint {self.foreign_key_name(entity.table, column)} "
            f"foreign key ({self._id(column)}) "
            f"references {self._id(attribute.references)}({self._id(attribute.reference_column)})",
            StatementCategory.ALTER,
        )

    # ========== 序列模擬 ==========

    def create_sequence_statement(self, name: str, start: int = 1, increment: int = 1) -> Statement:
        """以 identity 表格模擬序列"""
        return Statement(
            f"create table {name.upper()} (ID {self.catalog.long_identity_type}({start},{increment}), "
            f"CREATE_TS {self.catalog.timestamp_type}) {self.catalog.sequence_terminator}",
            StatementCategory.CREATE,
        )

    def sequence_exists_statement(self, name: str) -> Statement:
        return Statement(
            f"select * from INFORMATION_SCHEMA.TABLES where TABLE_NAME = '{escape_string(name.upper())}' "
            f"{self.catalog.sequence_terminator}",
            StatementCategory.CREATE,
        )

    def delete_sequence_statement(self, name: str) -> Statement:
        return Statement(f"drop table {name.upper()} {self.catalog.sequence_terminator}", StatementCategory.DROP)

    # ========== 索引/約束 ==========

    def drop_index_statement(self, table: str, index: str) -> Statement:
        return self._stmt(f"drop index {self._id(index)} on {self._id(table)}", StatementCategory.DROP)

    def drop_constraint_statement(self, table: str, constraint: str) -> Statement:
        return self._stmt(
            f"alter table {self._id(table)} drop constraint {self._id(constraint)}", StatementCategory.DROP
        )

    def create_index_statement(
        self,
        entity: EntityDescriptor,
        index: str,
        columns: Iterable[str],
        unique: bool = False,
    ) -> Statement:
        """
        建立索引

        軟刪除實體的唯一索引加上 DELETE_TS，讓已刪除的資料列不佔用唯一值。
        """
        column_list = [self._id(c) for c in columns]
        if unique and entity.soft_delete and self.config.delete_ts_in_unique_index and "DELETE_TS" not in column_list:
            column_list.append("DELETE_TS")
        kind = "unique index" if unique else "index"
        return self._stmt(
            f"create {kind} {self._id(index)} on {self._id(entity.table)} ({', '.join(column_list)})",
            StatementCategory.CREATE,
        )
