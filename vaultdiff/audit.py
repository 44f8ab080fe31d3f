"""Audit logging of accessed secret paths."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TextIO


@dataclass
class AuditOptions:
    """Controls audit logging; disabled by default and writing to stderr."""

    enabled: bool = False
    writer: TextIO = field(default_factory=lambda: sys.stderr)
    redact_values: bool = True


@dataclass
class AuditEntry:
    """A single audited secret access."""

    path: str
    keys: list[str] = field(default_factory=list)
    source: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AuditLogger:
    """Writes audit entries to the configured writer when enabled."""

    def __init__(self, options: AuditOptions | None = None) -> None:
        self.options = options or AuditOptions()

    def log(self, entry: AuditEntry) -> None:
        """Write one line for ``entry``; does nothing when auditing is disabled."""
        if not self.options.enabled:
            return
        keys = list(entry.keys)
        stamp = entry.timestamp.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        self.options.writer.write(
            f"[audit] {stamp} source={entry.source} path={entry.path} "
            f"keys=[{' '.join(keys)}]\n"
        )