import time
import traceback
from typing import Optional, List
from enum import Enum
from dataclasses import dataclass
from collections import defaultdict, deque

import colorama

from FPT.config import config

colorama.init()

_debug_instance = None


class LogLevel(int, Enum):
    DEBUG = 0
    INFO = 1
    SUCCESS = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


@dataclass
class LogEntry:
    timestamp: float
    level: LogLevel
    message: str
    category: str
    frame_count: int
    stack_trace: Optional[List[str]] = None


ANSI_COLORS = {
    LogLevel.DEBUG: "\033[38;5;245m",
    LogLevel.INFO: "\033[38;5;207m",
    LogLevel.SUCCESS: "\033[38;5;46m",
    LogLevel.WARNING: "\033[38;5;226m",
    LogLevel.ERROR: "\033[38;5;203m",
    LogLevel.CRITICAL: "\033[38;5;196m"
}
RESET = "\033[0m"


class DebugManager:

    def __init__(self, max_log_entries=None, log_file=None, auto_save_logs=None, echo=True):
        self.enabled = config.debug.enabled
        self.log_entries: deque = deque(maxlen=max_log_entries or config.debug.max_log_entries)
        self.frame_count = 0
        self.start_time = time.time()
        self.performance_counters = defaultdict(float)
        self.stats = defaultdict(int)
        self.log_file = log_file or config.debug.log_file
        self.auto_save_logs = config.debug.auto_save_logs if auto_save_logs is None else auto_save_logs
        self.echo = echo

    def next_frame(self):
        self.frame_count += 1

    def log(self, level: LogLevel, message: str, category: str = "General",
            include_stack: bool = False):
        if not self.enabled:
            return

        stack_trace = None
        if include_stack:
            stack_trace = traceback.format_exc().splitlines(keepends=True)
            if stack_trace == ["NoneType: None\n"]:
                stack_trace = traceback.format_stack()[:-2]
        elif level >= LogLevel.ERROR:
            stack_trace = traceback.format_stack()[:-2]

        color = ANSI_COLORS.get(level, "")
        for line in message.split('\n'):
            entry = LogEntry(
                timestamp=time.time() - self.start_time,
                level=level,
                message=line,
                category=category,
                frame_count=self.frame_count,
                stack_trace=stack_trace
            )
            self.log_entries.append(entry)
            if self.auto_save_logs and level >= LogLevel.ERROR:
                self._save_log_entry(entry)
            if self.echo:
                print(f"{color}[{level.name}] {category}: {line}{RESET}")

    def _save_log_entry(self, entry: LogEntry):
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                timestamp_str = time.strftime("%H:%M:%S", time.gmtime(entry.timestamp))
                f.write(f"[{timestamp_str}] [{entry.level.name}] {entry.category}: {entry.message}\n")
                if entry.stack_trace:
                    f.write("Stack trace:\n")
                    for line in entry.stack_trace:
                        f.write(f"  {line}")
                    f.write("\n")
        except OSError as e:
            print(f"Failed to save log entry: {e}")

    def entries(self, min_level: LogLevel = LogLevel.DEBUG, category: Optional[str] = None) -> List[LogEntry]:
        return [e for e in self.log_entries
                if e.level >= min_level and (category is None or e.category == category)]

    def set_performance_counter(self, name: str, value: float):
        self.performance_counters[name] = value

    def increment_stat(self, name: str, amount: int = 1):
        self.stats[name] += amount

    def get_stat(self, name: str) -> int:
        return self.stats.get(name, 0)


def get_debug():
    """Return the global DebugManager, creating it on first use."""
    global _debug_instance
    if _debug_instance is None:
        _debug_instance = DebugManager()
    return _debug_instance


def set_debug(debug_manager):
    global _debug_instance
    _debug_instance = debug_manager


class Debug:
    """Static shortcuts to the global DebugManager."""

    @staticmethod
    def log(message: str, category: str = "General"):
        get_debug().log(LogLevel.DEBUG, message, category)

    @staticmethod
    def log_info(message: str, category: str = "General"):
        get_debug().log(LogLevel.INFO, message, category)

    @staticmethod
    def log_warning(message: str, category: str = "General"):
        get_debug().log(LogLevel.WARNING, message, category)

    @staticmethod
    def log_exception(message: str, category: str = "General"):
        """Log a CRITICAL entry with the traceback of the exception being handled."""
        get_debug().log(LogLevel.CRITICAL, message, category, include_stack=True)

    @staticmethod
    def set_performance_counter(name: str, value: float):
        if _debug_instance:
            _debug_instance.set_performance_counter(name, value)

    @staticmethod
    def increment_stat(name: str, amount: int = 1):
        if _debug_instance:
            _debug_instance.increment_stat(name, amount)

    @staticmethod
    def get_stat(name: str) -> int:
        if _debug_instance:
            return _debug_instance.get_stat(name)
        return 0
