"""
日誌工具測試
"""

import logging

from schema_compiler import (
    ColumnDefinition,
    CompilerConfig,
    SchemaDiffOrchestrator,
    Statement,
    StatementCategory,
    StaticMetadataProvider,
)
from schema_compiler.utils import LoggerProtocol, NullLogger, get_component_logger, log_statements
from schema_compiler.utils.logging import ColoredFormatter


class RecordingLogger:
    def __init__(self):
        self.messages = []

    def debug(self, msg, *args, **kwargs):
        self.messages.append(("debug", msg))

    def info(self, msg, *args, **kwargs):
        self.messages.append(("info", msg))

    def warning(self, msg, *args, **kwargs):
        self.messages.append(("warning", msg))

    def error(self, msg, *args, **kwargs):
        self.messages.append(("error", msg))


def test_loggers_satisfy_protocol():
    assert isinstance(NullLogger(), LoggerProtocol)
    assert isinstance(RecordingLogger(), LoggerProtocol)


def test_component_logger_uses_injected_logger():
    external = RecordingLogger()
    assert get_component_logger("builder", CompilerConfig(logger=external)) is external


def test_component_logger_named_by_component():
    logger = get_component_logger("logging_test", CompilerConfig(log_level="WARNING"))
    assert logger.name == "schema_compiler.logging_test"
    assert logger.level == logging.WARNING


def test_log_statements_tags_category():
    logger = RecordingLogger()
    statements = [
        Statement("alter table CUSTOMER drop column CODE ^", StatementCategory.DROP),
        Statement("sp_rename 'A', 'B' ^\n", StatementCategory.RENAME),
        "drop table LEGACY ^",
    ]
    assert log_statements(logger, statements) == 3
    assert logger.messages == [
        ("debug", "[drop] alter table CUSTOMER drop column CODE ^"),
        ("debug", "[rename] sp_rename 'A', 'B' ^"),
        ("debug", "drop table LEGACY ^"),
    ]


def test_log_statements_disabled():
    logger = RecordingLogger()
    assert log_statements(logger, [Statement("drop table T ^", StatementCategory.DROP)], enabled=False) == 0
    assert logger.messages == []


def test_orchestrator_logs_plan_statements(catalog, customer):
    logger = RecordingLogger()
    config = CompilerConfig(logger=logger)
    orchestrator = SchemaDiffOrchestrator(catalog, StaticMetadataProvider(), config=config)
    orchestrator.plan_attribute_change(
        customer, customer.attribute("name"), ColumnDefinition(type="varchar", length=50)
    )
    assert ("debug", "[alter] alter table CUSTOMER alter column NAME varchar(100) ^") in logger.messages
    assert any(level == "info" and "Migration Plan for 'CUSTOMER'" in msg for level, msg in logger.messages)


def test_plain_formatter_output():
    formatter = ColoredFormatter("%(levelname)s | %(message)s", use_colors=False)
    record = logging.LogRecord("schema_compiler.test", logging.DEBUG, __file__, 1, "[drop] drop table T ^", None, None)
    assert formatter.format(record) == "DEBUG | [drop] drop table T ^"
