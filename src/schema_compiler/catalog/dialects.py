"""
內建方言目錄與方言註冊表

- access: 參考方言 (Microsoft Access / Jet，沒有原生 sequence)
- mssql: Microsoft SQL Server
"""

import threading
from typing import Dict, List

from ..exceptions import CatalogConfigurationError
from .type_catalog import TypeCatalog

ACCESS_RESERVED_WORDS = [
    'ABSOLUTE', 'ADD', 'ADMINDB', 'ALL', 'ALPHANUMERIC', 'ALTER', 'AND', 'ANY', 'ARE', 'AS',
    'ASC', 'ASSERTION', 'AUTHORIZATION', 'AUTOINCREMENT', 'AVG', 'BEGIN', 'BETWEEN', 'BINARY',
    'BIT', 'BIT_LENGTH', 'BOOLEAN', 'BOTH', 'BY', 'BYTE', 'CASCADE', 'CATALOG', 'CHAR', 'CHAR_LENGTH',
    'CHARACTER', 'CHARACTER_LENGTH', 'CHECK', 'CLOSE', 'CLUSTERED', 'COALESCE', 'COLLATE', 'COLLATION',
    'COLUMN', 'COMMIT', 'COMP', 'COMPRESSION', 'CONNECT', 'CONNECTION', 'CONSTRAINT', 'CONSTRAINTS',
    'CONTAINER', 'CONTAINS', 'CONVERT', 'COUNT', 'COUNTER', 'CREATE', 'CURRENCY', 'CURRENT_DATE',
    'CURRENT_TIME', 'CURRENT_TIMESTAMP', 'CURRENT_USER', 'CURSOR', 'DATABASE', 'DATE', 'DATETIME',
    'DAY', 'DEC', 'DECIMAL', 'DECLARE', 'DELETE', 'DESC', 'DISALLOW', 'DISCONNECT', 'DISTINCT',
    'DISTINCTROW', 'DOMAIN', 'DOUBLE', 'DROP', 'EQV', 'EXCLUSIVECONNECT', 'EXEC', 'EXECUTE', 'EXISTS',
    'EXTRACT', 'FALSE', 'FETCH', 'FIRST', 'FLOAT', 'FLOAT4', 'FLOAT8', 'FOREIGN', 'FROM',
    'GENERAL', 'GRANT', 'GROUP', 'GUID', 'HAVING', 'HOUR', 'IDENTITY', 'IEEEDOUBLE', 'IEEESINGLE',
    'IGNORE', 'IMAGE', 'IMP', 'IN', 'INDEX', 'INDEXCREATEDB', 'INNER', 'INPUT', 'INSENSITIVE',
    'INSERT', 'INT', 'INTEGER', 'INTEGER1', 'INTEGER2', 'INTEGER4', 'INTERVAL', 'INTO',
    'IS', 'ISOLATION', 'JOIN', 'KEY', 'LANGUAGE', 'LAST', 'LEFT', 'LEVEL', 'LIKE', 'LOGICAL',
    'LOGICAL1', 'LONG', 'LONGBINARY', 'LONGCHAR', 'LONGTEXT', 'LOWER', 'MATCH', 'MAX', 'MEMO',
    'MIN', 'MINUTE', 'MOD', 'MONEY', 'MONTH', 'NATIONAL', 'NCHAR', 'NONCLUSTERED', 'NOT', 'NTEXT',
    'NULL', 'NUMBER', 'NUMERIC', 'NVARCHAR', 'OCTET_LENGTH', 'OLEOBJECT', 'ON', 'OPEN', 'OPTION',
    'OR', 'ORDER', 'OUTER', 'OUTPUT', 'OWNERACCESS', 'PAD', 'PARAMETERS', 'PARTIAL', 'PASSWORD',
    'PERCENT', 'PIVOT', 'POSITION', 'PRECISION', 'PREPARE', 'PRIMARY', 'PRIVILEGES', 'PROC', 'PROCEDURE',
    'PUBLIC', 'REAL', 'REFERENCES', 'RESTRICT', 'REVOKE', 'RIGHT', 'ROLLBACK', 'SCHEMA', 'SECOND',
    'SELECT', 'SELECTSCHEMA', 'SELECTSECURITY', 'SET', 'SHORT', 'SINGLE', 'SIZE', 'SMALLDATETIME',
    'SMALLINT', 'SMALLMONEY', 'SOME', 'SPACE', 'SQL', 'SQLCODE', 'SQLERROR', 'SQLSTATE', 'STDEV',
    'STDEVP', 'STRING', 'SUBSTRING', 'SUM', 'SYSNAME', 'SYSTEM_USER', 'TABLE', 'TABLEID',
    'TEMPORARY', 'TEXT', 'TIME', 'TIMESTAMP', 'TIMEZONE_HOUR', 'TIMEZONE_MINUTE', 'TINYINT', 'TO',
    'TOP', 'TRAILING', 'TRANSACTION', 'TRANSFORM', 'TRANSLATE', 'TRANSLATION', 'TRIM', 'TRUE', 'UNION',
    'UNIQUE', 'UNIQUEIDENTIFIER', 'UNKNOWN', 'UPDATE', 'UPDATEIDENTITY', 'UPDATEOWNER', 'UPDATESECURITY',
    'UPPER', 'USAGE', 'USER', 'USING', 'VALUE', 'VALUES', 'VAR', 'VARBINARY', 'VARCHAR', 'VARP',
    'VARYING', 'VIEW', 'WHEN', 'WHENEVER', 'WHERE', 'WITH', 'WORK', 'XOR', 'YEAR', 'YESNO', 'ZONE',
]

ACCESS_CATALOG = TypeCatalog(
    name="access",
    types={
        'Boolean': 'bit',
        'byte[]': 'binary',
        'Character': 'character',
        'Date': 'datetime',
        'BigDecimal': 'decimal',
        'Double': 'double',
        'Integer': 'integer',
        'Long': 'decimal',
        'String': 'varchar',
        'UUID': 'uniqueidentifier',
    },
    temporal_types={
        'DATE': 'datetime',
        'TIME': 'datetime',
        'TIMESTAMP': 'datetime',
    },
    default_values={
        'Boolean': '0',
        'byte[]': "''",
        'Date': "'=Now()'",
        'DateTime': "'=Now()'",
        'Time': "'=Now()'",
        'BigDecimal': '0',
        'Double': '0',
        'Integer': '0',
        'Long': '0',
        'String': "''",
        'Character': "''",
        'UUID': 'newid()',
    },
    synonym_classes=(
        # 1 byte 布林值與整數
        ('tinyint', 'integer1', 'byte', 'bit', 'boolean', 'logical', 'logical1', 'yesno'),
        # 二進位物件與 OLE 物件
        ('binary', 'varbinary', 'binary varying', 'bit varying', 'varbinary(max)', 'image',
         'longbinary', 'general', 'oleobject'),
        # 以 8 bytes double 儲存
        ('datetime', 'smalldatetime', 'date', 'time'),
        # 0 - 255 字元，每字元 2 bytes
        ('char', 'alphanumeric', 'character', 'string', 'varchar', 'character varying', 'nchar',
         'national character', 'national char', 'national character varying', 'national char varying',
         'text(max)'),
        # decimal 17 bytes、money 8 bytes
        ('decimal', 'dec', 'numeric', 'money', 'smallmoney', 'currency'),
        # 4 與 8 bytes 浮點數
        ('float', 'double', 'float8', 'ieeedouble', 'number', 'real', 'single', 'float4', 'ieeesingle'),
        # 2 與 4 bytes 整數
        ('integer', 'long', 'int', 'integer4', 'smallint', 'short', 'integer2'),
        # 0 到 2.14 GB，每字元 2 bytes
        ('text', 'longtext', 'longchar', 'memo', 'note', 'ntext'),
        ('uniqueidentifier', 'guid'),
    ),
    reserved_words=ACCESS_RESERVED_WORDS,
    no_parameter_types=[
        'tinyint', 'integer1', 'byte', 'bit', 'boolean', 'logical', 'logical1', 'yesno',
        'datetime', 'smalldatetime', 'date', 'time',
        'decimal', 'dec', 'numeric', 'money', 'smallmoney', 'currency',
        'float', 'double', 'float8', 'ieeedouble', 'number', 'real', 'single', 'float4', 'ieeesingle',
        'integer', 'long', 'int', 'integer4', 'smallint', 'short', 'integer2',
        'uniqueidentifier', 'guid',
        'image', 'longbinary', 'general', 'oleobject',
        'bigint identity', 'int identity',
    ],
    auto_generated_types=['counter', 'autoincrement'],
)

MSSQL_CATALOG = TypeCatalog(
    name="mssql",
    types={
        'Boolean': 'tinyint',
        'byte[]': 'image',
        'Character': 'char',
        'Date': 'datetime',
        'LocalDate': 'date',
        'LocalTime': 'time',
        'LocalDateTime': 'datetime2',
        'BigDecimal': 'decimal',
        'Double': 'double precision',
        'Integer': 'integer',
        'Long': 'bigint',
        'String': 'varchar',
        'UUID': 'uniqueidentifier',
    },
    temporal_types={
        'DATE': 'date',
        'TIME': 'time',
        'TIMESTAMP': 'datetime',
    },
    default_values={
        'Boolean': '0',
        'Date': 'current_timestamp',
        'LocalDate': 'current_timestamp',
        'LocalTime': 'current_timestamp',
        'LocalDateTime': 'current_timestamp',
        'BigDecimal': '0',
        'Double': '0',
        'Integer': '0',
        'Long': '0',
        'String': "''",
        'Character': "''",
        'UUID': 'newid()',
    },
    synonym_classes=(
        ('tinyint', 'bit', 'smallint', 'int', 'integer'),
        ('bigint',),
        ('decimal', 'numeric', 'money', 'smallmoney'),
        ('double precision', 'float', 'real'),
        ('varchar', 'char', 'nchar', 'nvarchar', 'text', 'ntext'),
        ('datetime', 'datetime2', 'smalldatetime'),
        ('binary', 'varbinary', 'image'),
        ('uniqueidentifier',),
    ),
    reserved_words=[
        'ADD', 'ALL', 'ALTER', 'AND', 'ANY', 'AS', 'ASC', 'BACKUP', 'BEGIN', 'BETWEEN', 'BREAK',
        'BY', 'CASCADE', 'CASE', 'CHECK', 'CLUSTERED', 'COLUMN', 'COMMIT', 'CONSTRAINT', 'CREATE',
        'CROSS', 'CURRENT', 'CURRENT_DATE', 'CURRENT_TIME', 'CURRENT_TIMESTAMP', 'CURRENT_USER',
        'DATABASE', 'DEFAULT', 'DELETE', 'DESC', 'DISTINCT', 'DROP', 'ELSE', 'END', 'EXEC',
        'EXECUTE', 'EXISTS', 'FILE', 'FOR', 'FOREIGN', 'FROM', 'FULL', 'FUNCTION', 'GRANT', 'GROUP',
        'HAVING', 'IDENTITY', 'IN', 'INDEX', 'INNER', 'INSERT', 'INTO', 'IS', 'JOIN', 'KEY', 'LEFT',
        'LIKE', 'NONCLUSTERED', 'NOT', 'NULL', 'OF', 'ON', 'OPEN', 'OR', 'ORDER', 'OUTER', 'PERCENT',
        'PLAN', 'PRIMARY', 'PROC', 'PROCEDURE', 'PUBLIC', 'REFERENCES', 'RIGHT', 'ROLLBACK', 'RULE',
        'SCHEMA', 'SELECT', 'SET', 'TABLE', 'THEN', 'TO', 'TOP', 'TRAN', 'TRANSACTION', 'TRIGGER',
        'UNION', 'UNIQUE', 'UPDATE', 'USER', 'VALUES', 'VIEW', 'WHEN', 'WHERE', 'WITH',
    ],
    no_parameter_types=[
        'bit', 'tinyint', 'smallint', 'int', 'integer', 'bigint',
        'money', 'smallmoney', 'float', 'real', 'double precision',
        'datetime', 'datetime2', 'smalldatetime', 'date', 'time',
        'uniqueidentifier', 'image', 'text', 'ntext',
        'bigint identity', 'int identity',
    ],
    auto_generated_types=['timestamp', 'rowversion'],
)


_registry_lock = threading.Lock()
_REGISTRY: Dict[str, TypeCatalog] = {
    ACCESS_CATALOG.name: ACCESS_CATALOG,
    MSSQL_CATALOG.name: MSSQL_CATALOG,
}


def get_catalog(dialect: str) -> TypeCatalog:
    """
    依方言名稱取得類型目錄

    Raises:
        CatalogConfigurationError: 方言未註冊
    """
    catalog = _REGISTRY.get(dialect.lower())
    if catalog is None:
        raise CatalogConfigurationError(
            "dialect",
            f"未知的方言: {dialect}，可用方言: {available_dialects()}"
        )
    return catalog


def register_catalog(catalog: TypeCatalog, replace_existing: bool = False) -> None:
    """註冊自訂方言目錄 (通常在程式啟動時呼叫)"""
    key = catalog.name.lower()
    with _registry_lock:
        if key in _REGISTRY and not replace_existing:
            raise CatalogConfigurationError("dialect", f"方言 '{catalog.name}' 已註冊")
        _REGISTRY[key] = catalog


def available_dialects() -> List[str]:
    return sorted(_REGISTRY)
