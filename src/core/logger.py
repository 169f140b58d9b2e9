"""
Centralized Logging Module for Wellspring.

Provides structured terminal logging with:
- Color-coded output by component
- Request tracing with correlation IDs
- Performance timing for evaluation runs

Usage:
    from src.core.logger import log
    log.store("Fetched mood events", user=user_id, count=len(events))
    log.award("Achievement unlocked", rule="first_entry")
"""
import sys
import time
from datetime import datetime
from typing import Optional
from enum import Enum
from dataclasses import dataclass, field
from contextvars import ContextVar

# ANSI Colors
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Components
    API = "\033[38;5;39m"      # Blue
    STORE = "\033[38;5;208m"   # Orange
    STATS = "\033[38;5;82m"    # Green
    AWARD = "\033[38;5;141m"   # Purple
    ERROR = "\033[38;5;196m"   # Red
    WARN = "\033[38;5;226m"    # Yellow

    DEBUG = "\033[38;5;245m"   # Gray
    NOTIFY = "\033[38;5;51m"   # Cyan


class Component(Enum):
    API = "API"
    STORE = "STORE"
    STATS = "STATS"
    AWARD = "AWARD"
    NOTIFY = "NOTIFY"


# Context variable for request tracing
_request_id: ContextVar[str] = ContextVar('request_id', default='----')


@dataclass
class LogConfig:
    """Logging configuration."""
    enabled: bool = True
    show_timestamps: bool = True
    show_request_id: bool = True
    show_debug: bool = False
    component_filter: set = field(default_factory=set)  # Empty = show all


# Global config
config = LogConfig()


class Logger:
    """Centralized logger with component-based coloring."""

    def __init__(self):
        self._start_times: dict[str, float] = {}

    def set_request_id(self, req_id: str):
        """Set correlation ID for current request."""
        _request_id.set(req_id[:4])

    def _format(
        self,
        component: Component,
        message: str,
        level: str = "INFO",
        **kwargs
    ) -> str:
        """Format log line with colors and metadata."""
        if not config.enabled:
            return ""

        if level == "DEBUG" and not config.show_debug:
            return ""

        if config.component_filter and component.value not in config.component_filter:
            return ""

        color_map = {
            Component.API: Colors.API,
            Component.STORE: Colors.STORE,
            Component.STATS: Colors.STATS,
            Component.AWARD: Colors.AWARD,
            Component.NOTIFY: Colors.NOTIFY,
        }

        level_colors = {
            "INFO": Colors.RESET,
            "WARN": Colors.WARN,
            "ERROR": Colors.ERROR,
            "DEBUG": Colors.DEBUG,
        }

        parts = []

        if config.show_timestamps:
            ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
            parts.append(f"{Colors.DIM}{ts}{Colors.RESET}")

        if config.show_request_id:
            req_id = _request_id.get()
            parts.append(f"{Colors.DIM}[{req_id}]{Colors.RESET}")

        color = color_map.get(component, Colors.RESET)
        parts.append(f"{color}{Colors.BOLD}[{component.value:6}]{Colors.RESET}")

        # Level (only for non-INFO)
        if level != "INFO":
            parts.append(f"{level_colors.get(level, Colors.RESET)}{level}{Colors.RESET}")

        parts.append(message)

        # Extra kwargs as key=value
        if kwargs:
            extras = " ".join(f"{Colors.DIM}{k}={Colors.RESET}{v}" for k, v in kwargs.items())
            parts.append(extras)

        return " ".join(parts)

    def _print(self, component: Component, message: str, level: str = "INFO", **kwargs):
        """Print formatted log line."""
        line = self._format(component, message, level, **kwargs)
        if line:
            print(line, file=sys.stderr, flush=True)

    # === Component-specific methods ===

    def api(self, message: str, **kwargs):
        """Log API layer events."""
        self._print(Component.API, message, **kwargs)

    def store(self, message: str, **kwargs):
        """Log storage events."""
        self._print(Component.STORE, message, **kwargs)

    def stats(self, message: str, **kwargs):
        """Log statistics derivation events."""
        self._print(Component.STATS, message, **kwargs)

    def award(self, message: str, **kwargs):
        """Log achievement evaluation events."""
        self._print(Component.AWARD, message, **kwargs)

    def notify(self, message: str, **kwargs):
        """Log notification delivery."""
        self._print(Component.NOTIFY, message, **kwargs)

    def error(self, message: str, component: Component = Component.API, **kwargs):
        """Log errors from any component."""
        self._print(component, message, level="ERROR", **kwargs)

    def warn(self, message: str, component: Component = Component.API, **kwargs):
        """Log warnings."""
        self._print(component, message, level="WARN", **kwargs)

    def debug(self, message: str, component: Component = Component.API, **kwargs):
        """Log debug info (only when verbose)."""
        self._print(component, message, level="DEBUG", **kwargs)

    # === Timing helpers ===

    def start_timer(self, name: str):
        """Start a named timer."""
        self._start_times[name] = time.perf_counter()

    def end_timer(self, name: str) -> float:
        """End timer and return elapsed ms."""
        if name not in self._start_times:
            return 0.0
        elapsed = (time.perf_counter() - self._start_times.pop(name)) * 1000
        return round(elapsed, 2)

    # === Structured events ===

    def evaluation_start(self, user_id: str):
        """Log start of an achievement evaluation run."""
        import uuid
        req_id = str(uuid.uuid4())[:8]
        self.set_request_id(req_id)
        self.start_timer(f"evaluation:{user_id}")
        self.award("▶ Evaluation started", user=user_id)

    def evaluation_abort(self, user_id: str):
        """Log an evaluation that raised, and drop its timer."""
        elapsed = self.end_timer(f"evaluation:{user_id}")
        self.warn("Evaluation aborted", component=Component.AWARD,
                  user=user_id, duration=f"{elapsed}ms")

    def evaluation_end(self, user_id: str, awarded: int, points: int):
        """Log end of an achievement evaluation run."""
        elapsed = self.end_timer(f"evaluation:{user_id}")
        self.award("■ Evaluation finished",
                   user=user_id,
                   duration=f"{elapsed}ms",
                   awarded=awarded,
                   points=points)


# Global logger instance
log = Logger()


# Convenience function to enable/disable logging
def configure_logging(
    enabled: bool = True,
    show_debug: bool = False,
    components: Optional[set[str]] = None
):
    """Configure logging options at runtime."""
    config.enabled = enabled
    config.show_debug = show_debug
    if components:
        config.component_filter = components
