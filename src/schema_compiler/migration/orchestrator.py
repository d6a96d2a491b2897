"""
Schema 差異編排模組

SchemaDiffOrchestrator 組合方言目錄、差異判斷、語句產生器與中繼資料提供者，
為變更的屬性或實體產生最小且有序的語句序列。
"""

from typing import Dict, List, Mapping, Optional

from ..builder import DefaultBehaviors, Statement, StatementBuilder
from ..catalog import TypeCatalog
from ..compatibility import CompatibilityChecker
from ..config import CompilerConfig
from ..metadata.provider import MetadataProvider
from ..model import AttributeDescriptor, ColumnDefinition, EntityDescriptor
from ..utils.logging import get_component_logger, log_statements
from .plan import MigrationPlan
from .schema_diff import AttributeDiff, ChangeType


class SchemaDiffOrchestrator:
    """
    Schema 差異編排器

    Example:
        >>> orchestrator = SchemaDiffOrchestrator(ACCESS_CATALOG, provider)
        >>> current = ColumnDefinition(type="varchar", length=50)
        >>> plan = orchestrator.plan_attribute_change(entity, age_attr, current)
        >>> print(plan.report())
        >>> print(plan.script())
    """

    def __init__(
        self,
        catalog: TypeCatalog,
        metadata_provider: MetadataProvider,
        builder: Optional[StatementBuilder] = None,
        checker: Optional[CompatibilityChecker] = None,
        config: Optional[CompilerConfig] = None,
    ):
        self.catalog = catalog
        self.provider = metadata_provider
        self.config = config or (builder.config if builder else CompilerConfig(dialect=catalog.name))
        self.builder = builder or StatementBuilder(catalog, config=self.config)
        self.checker = checker or CompatibilityChecker(catalog)
        self.logger = get_component_logger("migration", self.config)

    @property
    def defaults(self) -> DefaultBehaviors:
        return self.builder.defaults

    def _log_plan(self, plan: MigrationPlan) -> MigrationPlan:
        self.logger.info(f"Migration plan created:\n{plan.report()}")
        log_statements(self.logger, plan.statements + plan.separate_drops, self.config.enable_statement_logging)
        for warning in plan.warnings:
            self.logger.warning(warning)
        return plan

    # ========== 差異 ==========

    def desired_column(self, entity: EntityDescriptor, attribute: AttributeDescriptor) -> ColumnDefinition:
        """
        由屬性推導目標欄位定義

        長度與 decimal 參數與建立/新增欄位時產生的 DDL 一致；不帶參數的
        decimal 類型保留屬性原本的精度與小數位數，交由方言預設精度的容忍規則比對。

        Raises:
            InvalidAttributeConfigurationError: 嵌入屬性
            UnknownLogicalTypeError: 方言未定義屬性的邏輯類型
        """
        column_type = self.builder.column_type(entity, attribute)
        length = None
        precision = None
        scale = None
        if not (attribute.is_id or attribute.is_class):
            if attribute.type.is_text or self.builder.is_string_enum(attribute):
                length = self.builder.text_column_length(entity, attribute)
            elif attribute.type.is_decimal:
                if self.catalog.is_no_parameter_type(column_type):
                    precision, scale = attribute.precision, attribute.scale
                else:
                    precision, scale = self.defaults.decimal_precision_scale(entity, attribute)
        return ColumnDefinition(
            type=column_type,
            length=length,
            precision=precision,
            scale=scale,
            nullable=not (attribute.is_mandatory or attribute.is_id),
        )

    def _has_length(self, attribute: AttributeDescriptor, desired: ColumnDefinition) -> bool:
        if attribute.is_id or attribute.is_class:
            return False
        text_like = attribute.type.is_text or (attribute.is_enum and desired.length is not None)
        return text_like and not self.catalog.is_no_parameter_type(desired.type)

    def diff_attribute(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        current: ColumnDefinition,
        column: Optional[str] = None,
    ) -> AttributeDiff:
        """比對屬性與資料庫目前的欄位定義"""
        desired = self.desired_column(entity, attribute)
        diff = AttributeDiff(
            table=entity.table,
            column=(column or entity.column_name(attribute)).upper(),
            desired=desired,
            current=current,
        )
        diff.type_changed = self.checker.is_type_different(
            attribute, desired.type, current.type, current.length or 0
        )
        if diff.type_changed:
            return diff

        if self._has_length(attribute, desired):
            diff.length_changed = self.checker.is_length_different(desired.length, current.length, current.type)
        if attribute.type.is_decimal and not (attribute.is_id or attribute.is_class or attribute.is_enum):
            diff.precision_changed = self.checker.is_precision_different(
                desired.precision or 0, current.precision or 0, current.type
            )
            diff.scale_changed = self.checker.is_scale_different(
                desired.scale or 0, current.scale or 0, current.type
            )
        diff.mandatory_changed = self.checker.is_mandatory_different(
            attribute.is_mandatory, current.nullable, attribute.is_id
        )
        return diff

    # ========== 單一屬性 ==========

    def _key_statements(self, entity: EntityDescriptor, attribute: AttributeDescriptor, column: str) -> List[Statement]:
        """重建欄位後需要重新加上的主鍵/外鍵約束"""
        if attribute.is_id:
            return self.builder.primary_key_constraint_statements(entity, not_null=False)
        if attribute.is_class and attribute.references:
            return [self.builder.add_foreign_key_statement(entity, attribute, column)]
        return []

    def plan_attribute_change(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        current: ColumnDefinition,
        column: Optional[str] = None,
        table_has_rows: bool = True,
    ) -> MigrationPlan:
        """
        為單一變更屬性建立遷移計劃

        - REBUILD: 刪除依賴的約束/索引 -> 刪除欄位 -> 新增欄位 -> 重新加上主鍵/外鍵
        - ALTER: 只處理有差異的部分，依序為長度 -> decimal 參數 -> 必填
        - NO_CHANGE: 空計劃

        Raises:
            MetadataAccessError: 中繼資料查詢失敗 (原樣向上傳遞)
        """
        column = column or entity.column_name(attribute)
        diff = self.diff_attribute(entity, attribute, current, column)
        plan = MigrationPlan(table=entity.table, diffs=[diff])

        if diff.change_type is ChangeType.NO_CHANGE:
            return plan

        if diff.change_type is ChangeType.REBUILD:
            plan.warnings.append(
                f"Type change '{entity.table}.{column}': {current.type} -> {diff.desired.type} "
                f"drops and re-creates the column, existing data is lost"
            )
            statements = self.builder.drop_column_dependency_statements(self.provider, entity.table, column)
            if attribute.is_id:
                statements.append(self.builder.drop_constraint_statement(entity.table, f"PK_{entity.table}"))
            statements.append(self.builder.drop_column_statement(entity.table, column))
            statements.extend(self.builder.add_column_statements(entity, attribute, column, table_has_rows))
            statements.extend(self._key_statements(entity, attribute, column))
            plan.statements = statements
            return self._log_plan(plan)

        new_type = diff.desired.type
        if diff.length_changed:
            plan.statements.append(self.builder.alter_column_length_statement(entity, attribute, new_type, column))
        if diff.decimal_changed:
            plan.statements.append(
                self.builder.alter_column_decimal_params_statement(entity, attribute, new_type, column)
            )
        if diff.mandatory_changed:
            if attribute.is_mandatory and table_has_rows:
                default = self.defaults.transitional_default(entity, attribute)
                if default is not None:
                    plan.statements.append(self.builder.fill_null_values_statement(entity.table, column, default))
                else:
                    plan.warnings.append(
                        f"'{entity.table}.{column}' has no transitional default, "
                        f"existing NULL values must be filled before it becomes not null"
                    )
            plan.statements.extend(self.builder.alter_column_mandatory_statements(entity, attribute, column))
        return self._log_plan(plan)

    def plan_add_attribute(
        self,
        entity: EntityDescriptor,
        attribute: AttributeDescriptor,
        column: Optional[str] = None,
        table_has_rows: bool = True,
    ) -> MigrationPlan:
        """新增屬性的欄位 (嵌入屬性展開為多個欄位)，參照屬性一併加上外鍵"""
        plan = MigrationPlan(table=entity.table)
        plan.statements.extend(self.builder.add_column_statements(entity, attribute, column, table_has_rows))

        for scalar, scalar_column in self.builder.expand_attribute(entity, attribute):
            if attribute.is_embedded:
                target_column = scalar_column
            else:
                target_column = column or scalar_column
            if scalar.is_mandatory and table_has_rows and not scalar.is_id:
                if self.defaults.transitional_default(entity, scalar) is None:
                    plan.warnings.append(
                        f"'{entity.table}.{target_column}' has no transitional default, "
                        f"existing rows must be filled before it becomes not null"
                    )
            if scalar.is_class and scalar.references:
                plan.statements.append(self.builder.add_foreign_key_statement(entity, scalar, target_column))
        return self._log_plan(plan)

    def plan_drop_column(self, table: str, column: str) -> MigrationPlan:
        """
        Raises:
            MetadataAccessError: 中繼資料查詢失敗
        """
        plan = MigrationPlan(table=table)
        plan.statements = self.builder.drop_column_statements(self.provider, table, column)
        return self._log_plan(plan)

    # ========== 整個實體 ==========

    def plan_create_entity(self, entity: EntityDescriptor) -> MigrationPlan:
        """建立表格，並為參照屬性加上外鍵約束"""
        plan = MigrationPlan(table=entity.table)
        plan.statements.append(self.builder.create_table_statement(entity))
        for attribute in entity.attributes:
            for scalar, column in self.builder.expand_attribute(entity, attribute):
                if scalar.is_class and scalar.references:
                    plan.statements.append(self.builder.add_foreign_key_statement(entity, scalar, column))
        return self._log_plan(plan)

    def plan_drop_entity(self, table: str) -> MigrationPlan:
        """先刪除表格的外鍵約束，再刪除表格"""
        plan = MigrationPlan(table=table)
        plan.statements = self.builder.drop_table_constraint_statements(self.provider, table)
        plan.statements.append(self.builder.drop_table_statement(table))
        return self._log_plan(plan)

    def plan_entity_changes(
        self,
        entity: EntityDescriptor,
        current_columns: Mapping[str, ColumnDefinition],
        table_has_rows: bool = True,
    ) -> MigrationPlan:
        """
        比對整個實體與資料庫目前的欄位

        - 缺少的欄位: 新增
        - 已存在的欄位: 依差異修改或重建
        - 模型中沒有的欄位: 刪除；generate_separately_drop_scripts 開啟時放在
          separate_drops，不混入主要語句
        - 由資料庫自動填值的欄位類型不視為孤立欄位

        Args:
            entity: 實體描述
            current_columns: 欄位名稱 -> 目前的欄位定義 (不分大小寫)
            table_has_rows: 表格是否已有資料
        """
        current: Dict[str, ColumnDefinition] = {k.upper(): v for k, v in current_columns.items()}
        plan = MigrationPlan(table=entity.table)
        seen = set()

        for attribute in entity.attributes:
            for scalar, column in self.builder.expand_attribute(entity, attribute):
                key = column.upper()
                seen.add(key)
                if key in current:
                    sub_plan = self.plan_attribute_change(entity, scalar, current[key], column, table_has_rows)
                else:
                    sub_plan = self.plan_add_attribute(entity, scalar, column, table_has_rows)
                plan.merge(sub_plan)

        for key, definition in current.items():
            if key in seen or self.catalog.is_auto_generated(definition.type):
                continue
            drops = self.builder.drop_column_statements(self.provider, entity.table, key)
            if self.config.generate_separately_drop_scripts:
                plan.separate_drops.extend(drops)
            else:
                plan.statements.extend(drops)

        self.logger.info(
            f"Entity '{entity.name}' ({entity.table}): {len(plan.statements)} statements, "
            f"{len(plan.separate_drops)} separate drops"
        )
        return plan
