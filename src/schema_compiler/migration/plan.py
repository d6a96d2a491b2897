"""
遷移計劃模組
"""

from dataclasses import dataclass, field
from typing import List

from ..builder import Statement
from .schema_diff import AttributeDiff, ChangeType


@dataclass
class MigrationPlan:
    """
    遷移計劃

    計劃只保存產生的語句，不執行。

    Attributes:
        table: 表格名稱
        statements: 依執行順序排列的語句
        diffs: 計劃涵蓋的屬性差異
        warnings: 警告訊息列表
        separate_drops: 另外產生的孤立欄位刪除語句
    """
    table: str
    statements: List[Statement] = field(default_factory=list)
    diffs: List[AttributeDiff] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    separate_drops: List[Statement] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.statements and not self.separate_drops

    @property
    def change_type(self) -> ChangeType:
        """計劃中最具破壞性的變更類型"""
        types = {d.change_type for d in self.diffs}
        if ChangeType.REBUILD in types:
            return ChangeType.REBUILD
        if ChangeType.ALTER in types:
            return ChangeType.ALTER
        return ChangeType.NO_CHANGE

    def merge(self, other: "MigrationPlan") -> None:
        """將另一個計劃的內容附加到本計劃之後"""
        self.statements.extend(other.statements)
        self.diffs.extend(other.diffs)
        self.warnings.extend(other.warnings)
        self.separate_drops.extend(other.separate_drops)

    @staticmethod
    def _render(statements: List[Statement]) -> str:
        return "\n".join(s.rstrip("\n") for s in statements)

    def script(self) -> str:
        """組成腳本文字，每行一個語句"""
        return self._render(self.statements)

    def drop_script(self) -> str:
        return self._render(self.separate_drops)

    def report(self) -> str:
        """生成遷移計劃報告"""
        lines = [
            f"Migration Plan for '{self.table}'",
            f"Change type: {self.change_type.value}",
        ]

        changed = [d for d in self.diffs if d.has_changes]
        if changed:
            lines.append("\nChanges:")
            for diff in changed:
                lines.append(f"  {diff}")

        if self.warnings:
            lines.append("\nWarnings:")
            for warning in self.warnings:
                lines.append(f"  ! {warning}")

        if self.statements:
            lines.append(f"\nStatements ({len(self.statements)} total):")
            for i, statement in enumerate(self.statements, 1):
                lines.append(f"  {i}. {statement.rstrip()}")

        if self.separate_drops:
            lines.append(f"\nSeparate drop statements ({len(self.separate_drops)} total):")
            for i, statement in enumerate(self.separate_drops, 1):
                lines.append(f"  {i}. {statement.rstrip()}")

        return "\n".join(lines)
