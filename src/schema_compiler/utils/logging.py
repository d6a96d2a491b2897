"""
Schema Compiler 日誌模組

每個元件 (builder / migration / metadata) 使用 schema_compiler.<元件> 命名的日誌器。
配置可注入外部日誌器，或用 NullLogger 關閉輸出。產生的 DDL 語句以 DEBUG
逐一記錄，格式為 "[類別] 語句"。
"""

import logging
import sys
from typing import TYPE_CHECKING, Iterable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config import CompilerConfig

LOGGER_PREFIX = "schema_compiler"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@runtime_checkable
class LoggerProtocol(Protocol):
    """
    日誌器介面協議

    標準 logging.Logger、loguru 或 NullLogger 都符合此介面。
    """

    def debug(self, msg: str, *args, **kwargs) -> None:
        ...

    def info(self, msg: str, *args, **kwargs) -> None:
        ...

    def warning(self, msg: str, *args, **kwargs) -> None:
        ...

    def error(self, msg: str, *args, **kwargs) -> None:
        ...


class NullLogger:
    """
    空日誌器

    Example:
        >>> config = CompilerConfig(logger=NullLogger())
        >>> StatementBuilder(ACCESS_CATALOG, config=config)  # 不輸出任何日誌
    """

    def debug(self, msg: str, *args, **kwargs) -> None:
        pass

    def info(self, msg: str, *args, **kwargs) -> None:
        pass

    def warning(self, msg: str, *args, **kwargs) -> None:
        pass

    def error(self, msg: str, *args, **kwargs) -> None:
        pass

    def critical(self, msg: str, *args, **kwargs) -> None:
        pass


class ColoredFormatter(logging.Formatter):
    """
    終端機彩色格式化器

    除了級別名稱，語句記錄中的類別標記 ([create]、[drop] ...) 也會上色，
    方便在遷移輸出中辨認破壞性語句。
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    CATEGORY_COLORS = {
        "[create]": "\033[32m",
        "[alter]": "\033[34m",
        "[drop]": "\033[31m",
        "[rename]": "\033[35m",
        "[update]": "\033[33m",
    }

    def __init__(self, fmt: str = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def _color_category(self, message: str) -> str:
        for tag, color in self.CATEGORY_COLORS.items():
            if message.startswith(tag):
                return f"{color}{tag}{self.COLORS['RESET']}{message[len(tag):]}"
        return message

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.use_colors:
            return text

        level = record.levelname
        if level in self.COLORS:
            text = text.replace(f"| {level}", f"| {self.COLORS[level]}{level}{self.COLORS['RESET']}", 1)
        message = record.getMessage()
        if message and text.endswith(message):
            text = text[: len(text) - len(message)] + self._color_category(message)
        return text


def get_logger(
    name: str = LOGGER_PREFIX,
    level: str = "INFO",
    external_logger: Optional[logging.Logger] = None,
    use_colors: bool = True,
) -> logging.Logger:
    """
    獲取日誌器

    Args:
        name: 日誌器名稱
        level: 日誌級別 ("DEBUG", "INFO", "WARNING", "ERROR")
        external_logger: 外部注入的日誌器，有值時直接返回
        use_colors: 內建日誌器是否使用彩色輸出

    Returns:
        logging.Logger: 日誌器實例
    """
    if external_logger is not None:
        return external_logger

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logger.level)
    if use_colors:
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, use_colors=True))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # 防止重複輸出到 root logger
    logger.propagate = False
    return logger


def get_component_logger(component: str, config: "CompilerConfig") -> logging.Logger:
    """
    依配置取得元件日誌器

    Example:
        >>> logger = get_component_logger("builder", config)
        >>> logger.name
        'schema_compiler.builder'
    """
    return get_logger(
        name=f"{LOGGER_PREFIX}.{component}",
        level=config.log_level,
        external_logger=config.logger,
    )


def log_statements(logger: LoggerProtocol, statements: Iterable[str], enabled: bool = True) -> int:
    """
    以 DEBUG 逐一記錄語句

    帶有 category 的 Statement 記為 "[類別] 語句"，結尾換行會去除。

    Returns:
        int: 記錄的語句數量，enabled 為 False 時為 0
    """
    if not enabled:
        return 0
    count = 0
    for statement in statements:
        category = getattr(statement, "category", None)
        text = str(statement).rstrip()
        if category is not None:
            text = f"[{category.value}] {text}"
        logger.debug(text)
        count += 1
    return count
