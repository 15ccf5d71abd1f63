"""
Structured console logger

    [14:23:45] CONFIG     ✓ Loaded setting 'TopHeight'
               └─ value: 120.0

Modules bind a category once at import time:

    log = get_logger().for_category(LogCategory.PLAYGROUND)
    log.warn("Preview image not found", path=preview)
"""

from datetime import datetime
from typing import Dict, Optional, Tuple

from models.enums import LogLevel, LogCategory

RESET = '\033[0m'
DIM = '\033[2m'

CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: '\033[36m',      # cyan
    LogCategory.PLAYGROUND: '\033[96m',  # bright cyan
    LogCategory.ANIMATION: '\033[93m',   # bright yellow
    LogCategory.SYSTEM: '\033[97m',      # bright white
    LogCategory.EVENT: '\033[95m',       # bright magenta
    LogCategory.TASK: '\033[94m',        # bright blue
}

# level -> (rank, symbol, color)
LEVEL_STYLE: Dict[LogLevel, Tuple[int, str, str]] = {
    LogLevel.DEBUG: (0, '·', DIM),
    LogLevel.INFO: (1, '✓', '\033[32m'),
    LogLevel.WARN: (2, '⚠', '\033[33m'),
    LogLevel.ERROR: (3, '✗', '\033[31m'),
}

DETAIL_INDENT = " " * 11


class Logger:
    """Prints one header line per message plus a tree of key/value details."""

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Args:
            category: Log category (CONFIG, PLAYGROUND, ...)
            message: Header line text
            level: Dropped when below min_level
            details: Extra detail lines, printed before the keyword details
            **kwargs: Printed as "key: value" detail lines
        """
        rank, symbol, color = LEVEL_STYLE[level]
        if rank < LEVEL_STYLE[self.min_level][0]:
            return

        stamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(10), CATEGORY_COLORS.get(category, ''))
        print(f"{stamp} {cat} {self._paint(symbol, color)} {self._paint(message, color)}")

        lines = list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()]
        for i, line in enumerate(lines):
            branch = "└─" if i == len(lines) - 1 else "├─"
            print(f"{DETAIL_INDENT}{self._paint(branch, DIM)} {line}")

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def debug(self, message: str, **kw): self._base.log(self._category, message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self._base.log(self._category, message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self._base.log(self._category, message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self._base.log(self._category, message, LogLevel.ERROR, **kw)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """Bound loggers keep a reference to the singleton, so it is updated in place."""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
