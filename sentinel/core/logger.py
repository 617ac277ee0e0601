"""
Sentinel - Logger Module
========================

Tree-style logging with configurable timezone and daily rotation.

DESIGN:
    Structured, hierarchical output that's easy to scan visually.
    Tree-style formatting groups related information together, so one
    interaction produces one readable block instead of scattered lines.

    Key features:
    - Tree-style formatting for structured data visualization
    - Timezone-aware timestamps (SENTINEL_LOG_TZ, default UTC)
    - Daily log files in dated folders
    - 7-day log retention with automatic cleanup
    - Session tracking with unique run IDs
"""

import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from zoneinfo import ZoneInfo


# =============================================================================
# Constants
# =============================================================================

LOGS_DIR = Path(os.getenv("SENTINEL_LOG_DIR", "logs"))
"""Directory for all log files, organized by date."""

LOG_RETENTION_DAYS = 7
"""Number of days to retain log directories before cleanup."""

LOG_TZ = ZoneInfo(os.getenv("SENTINEL_LOG_TZ", "UTC"))
"""Timezone used for every log timestamp."""


# =============================================================================
# Tree Logger Class
# =============================================================================

class TreeLogger:
    """
    Logger with tree-style formatting and timezone support.

    Attributes:
        run_id: Unique identifier for this process.
        log_file: Path to the main log file.
        error_file: Path to the error-only log file.
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self.run_id: str = str(uuid.uuid4())[:8]
        self.logs_dir = logs_dir

        today = datetime.now(LOG_TZ).strftime("%Y-%m-%d")
        self.log_dir = logs_dir / today
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / f"Sentinel-{today}.log"
        self.error_file = self.log_dir / f"Sentinel-Errors-{today}.log"

        self._cleanup_old_logs()
        self._write_session_header()

    # =========================================================================
    # Log Cleanup
    # =========================================================================

    def _cleanup_old_logs(self) -> None:
        """
        Remove log directories older than the retention period.

        Only directories named YYYY-MM-DD are considered.
        """
        if not self.logs_dir.exists():
            return

        now = datetime.now()
        deleted = 0

        for item in self.logs_dir.iterdir():
            if not item.is_dir():
                continue
            try:
                dir_date = datetime.strptime(item.name, "%Y-%m-%d")
            except ValueError:
                continue  # Not a dated directory
            if (now - dir_date).days > LOG_RETENTION_DAYS:
                for f in item.iterdir():
                    f.unlink()
                item.rmdir()
                deleted += 1

        if deleted > 0:
            print(f"[LOG CLEANUP] Removed {deleted} old log directories")

    def _write_session_header(self) -> None:
        header = f"""
============================================================
NEW SESSION - RUN ID: {self.run_id}
[{datetime.now(LOG_TZ).strftime("%H:%M:%S %Z")}]
============================================================
"""
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(header)

    # =========================================================================
    # Core Logging
    # =========================================================================

    def _get_timestamp(self) -> str:
        return datetime.now(LOG_TZ).strftime("[%H:%M:%S %Z]")

    def _write(
        self,
        message: str,
        emoji: str = "",
        include_timestamp: bool = True,
        is_error: bool = False,
    ) -> None:
        """
        Write log message to console and file.

        Args:
            message: Log message content.
            emoji: Optional emoji prefix.
            include_timestamp: Whether to prepend timestamp.
            is_error: Whether to also write to the error log.
        """
        if include_timestamp:
            timestamp = self._get_timestamp()
            full_message = f"{timestamp} {emoji} {message}" if emoji else f"{timestamp} {message}"
        else:
            full_message = f"{emoji} {message}" if emoji else message

        print(full_message)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"{full_message}\n")

        if is_error:
            with open(self.error_file, "a", encoding="utf-8") as f:
                f.write(f"{full_message}\n")

    def _write_details(self, details: List[Tuple[str, str]], is_error: bool = False) -> None:
        for i, (key, value) in enumerate(details):
            prefix = "└─" if i == len(details) - 1 else "├─"
            self._write(
                f"  {prefix} {key}: {value}",
                include_timestamp=False,
                is_error=is_error,
            )

    # =========================================================================
    # Tree Formatting
    # =========================================================================

    def tree(
        self,
        title: str,
        items: List[Tuple[str, str]],
        emoji: str = "📦",
    ) -> None:
        """
        Log structured data in tree format.

        Example output:
            [14:30:45 UTC] 🛡️ Interaction Handled
              ├─ Type: 2
              ├─ Command: sentinel-warn
              └─ Outcome: ok
        """
        self._write(title, emoji=emoji)
        self._write_details(items)

    # =========================================================================
    # Log Levels
    # =========================================================================

    def info(self, msg: str, details: Optional[List[Tuple[str, str]]] = None) -> None:
        self._write(msg, "ℹ️")
        if details:
            self._write_details(details)

    def success(self, msg: str, details: Optional[List[Tuple[str, str]]] = None) -> None:
        self._write(msg, "✅")
        if details:
            self._write_details(details)

    def warning(self, msg: str, details: Optional[List[Tuple[str, str]]] = None) -> None:
        self._write(msg, "⚠️")
        if details:
            self._write_details(details)

    def error(
        self,
        msg: str,
        details: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        """
        Log error message with optional structured details.

        Errors are always written to both the main and the error log.
        """
        self._write(msg, "❌", is_error=True)
        if details:
            self._write_details(details, is_error=True)


# =============================================================================
# Global Instance
# =============================================================================

logger = TreeLogger()
"""Global logger instance shared by every module."""


__all__ = [
    "logger",
    "TreeLogger",
]
