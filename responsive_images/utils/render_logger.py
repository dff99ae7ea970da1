"""
Debug logging for render calls.

Output is controlled by ``RESPONSIVE_IMAGES_DEBUG_LEVEL`` (NONE, INFO, DEBUG,
TRACE). Events are printed to the console and, with
``RESPONSIVE_IMAGES_LOG_TO_FILE=true``, appended as JSON Lines to
``render_calls.jsonl`` in ``RESPONSIVE_IMAGES_LOG_DIR``.
"""

import json
import os
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


class LogLevel(Enum):
    """Verbosity of render logging; each level includes the ones below it."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


def _read_level(value: str) -> LogLevel:
    """Unknown level names disable logging."""
    return LogLevel.__members__.get(value.strip().upper(), LogLevel.NONE)


class RenderLogger:
    """Process-wide logger shared by every renderer; see get_logger()."""

    _instance: Optional["RenderLogger"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        # Configuration is read once, on first use
        if self._initialized:
            return

        load_dotenv()
        self.level = _read_level(os.getenv("RESPONSIVE_IMAGES_DEBUG_LEVEL", "NONE"))
        self.log_to_file = os.getenv("RESPONSIVE_IMAGES_LOG_TO_FILE", "false").lower() == "true"
        self.log_dir = Path(os.getenv("RESPONSIVE_IMAGES_LOG_DIR", "logs"))
        self._initialized = True

    def _should_log(self, min_level: LogLevel) -> bool:
        return self.level.value >= min_level.value

    def _format_timestamp(self) -> str:
        return datetime.now().isoformat()

    def _truncate_content(self, content: str, max_len: int = 200) -> str:
        """Shorten long markup and results for console previews."""
        if len(content) > max_len:
            return f"{content[:max_len]}... [truncated]"
        return content

    def _write_to_file(self, log_entry: Dict[str, Any]):
        """Append one JSON record when file output is enabled."""
        if not self.log_to_file:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        with open(self.log_dir / "render_calls.jsonl", "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")

    def log_message(self, level: LogLevel, component: str, message: str):
        """Log a free-form message for a component."""
        if not self._should_log(level):
            return
        timestamp = self._format_timestamp()
        print(f"[{timestamp}] [{component}] {message}")
        self._write_to_file({
            "timestamp": timestamp,
            "level": level.name,
            "component": component,
            "message": message,
        })

    def log_render_start(
        self,
        component: str,
        mode: str,
        source: Optional[str] = None,
    ) -> str:
        """
        Log the start of a render call.

        Returns:
            Render ID (UUID string) for tracking this call, empty when disabled
        """
        if not self._should_log(LogLevel.INFO):
            return ""

        render_id = str(uuid.uuid4())
        timestamp = self._format_timestamp()

        console_msg = f"[{timestamp}] Render: [{component}] mode={mode}"
        if source:
            console_msg += f" | source: {source}"
        print(console_msg)

        return render_id

    def log_derivative(
        self,
        render_id: str,
        component: str,
        source: str,
        options: Dict[str, Any],
        result: Any,
        latency_ms: float,
    ):
        """Log a single derivative request and its outcome."""
        if not self._should_log(LogLevel.DEBUG):
            return

        timestamp = self._format_timestamp()
        result_preview = self._truncate_content(str(result), 120)
        print(f"  [{component}] {source} -> {result_preview} ({latency_ms:.1f}ms)")
        if self._should_log(LogLevel.TRACE):
            print(f"    instructions: {json.dumps(options, sort_keys=True)}")

        log_entry = {
            "timestamp": timestamp,
            "level": self.level.name,
            "component": component,
            "render_id": render_id,
            "source": source,
            "instructions": options if self.level == LogLevel.TRACE else None,
            "result": result_preview,
            "timing": {"latency_ms": latency_ms},
        }
        self._write_to_file(log_entry)

    def log_degradation(
        self,
        render_id: str,
        component: str,
        reason: str,
        detail: str = "",
    ):
        """Log that responsive markup was skipped because of a resolution failure."""
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        console_msg = f"[{timestamp}] Degraded: [{component}] {reason}"
        if detail:
            console_msg += f" | {self._truncate_content(detail, 150)}"
        print(console_msg)

        self._write_to_file({
            "timestamp": timestamp,
            "level": "INFO",
            "component": component,
            "render_id": render_id,
            "reason": reason,
            "detail": detail,
        })

    def log_render_complete(
        self,
        render_id: str,
        component: str,
        mode: str,
        candidate_count: int,
        latency_ms: float,
        markup: Optional[str] = None,
    ):
        """Log the end of a render call."""
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        print(
            f"[{timestamp}] Rendered: [{component}] mode={mode} | "
            f"{candidate_count} candidates | {latency_ms:.1f}ms"
        )
        if markup and self._should_log(LogLevel.TRACE):
            print(f"  Markup: {self._truncate_content(markup, 500)}")

        self._write_to_file({
            "timestamp": timestamp,
            "level": self.level.name,
            "component": component,
            "render_id": render_id,
            "mode": mode,
            "candidate_count": candidate_count,
            "markup": markup if self.level == LogLevel.TRACE else None,
            "timing": {"latency_ms": latency_ms},
        })


def get_logger() -> RenderLogger:
    """Shared RenderLogger instance."""
    return RenderLogger()
