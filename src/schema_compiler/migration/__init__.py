"""
Schema 遷移編排模組

Example:
    >>> from schema_compiler.migration import SchemaDiffOrchestrator
    >>> orchestrator = SchemaDiffOrchestrator(catalog, provider)
    >>> plan = orchestrator.plan_entity_changes(entity, current_columns)
    >>> print(plan.report())
"""

from .schema_diff import AttributeDiff, ChangeType, describe_column
from .plan import MigrationPlan
from .orchestrator import SchemaDiffOrchestrator

__all__ = [
    "AttributeDiff",
    "ChangeType",
    "describe_column",
    "MigrationPlan",
    "SchemaDiffOrchestrator",
]
