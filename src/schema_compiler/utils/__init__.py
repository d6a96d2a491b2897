"""
Schema Compiler 工具模組

包含日誌與識別符處理工具。
"""

from .logging import get_logger, get_component_logger, log_statements, NullLogger, LoggerProtocol
from .quoting import IdentifierQuoter, escape_string

__all__ = [
    # 日誌
    "get_logger",
    "get_component_logger",
    "log_statements",
    "NullLogger",
    "LoggerProtocol",
    # 識別符
    "IdentifierQuoter",
    "escape_string",
]
