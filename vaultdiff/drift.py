"""Detection of significant drift in a set of diff entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from vaultdiff.output import Change, DiffEntry


@dataclass
class DriftOptions:
    """Configures drift detection."""

    enabled: bool = False
    threshold: float = 10.0
    ignore_paths: list[str] = field(default_factory=list)


@dataclass
class DriftReport:
    """Summary of the drift found between two secret sets."""

    detected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_keys: int = 0
    changed_keys: int = 0
    drift_percent: float = 0.0
    significant: bool = False
    changed_paths: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        stamp = self.detected_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return (
            f"drift report [{stamp}]: {self.changed_keys}/{self.total_keys} keys changed "
            f"({self.drift_percent:.1f}%) significant={str(self.significant).lower()}"
        )


def detect_drift(results: Iterable[DiffEntry], options: DriftOptions) -> DriftReport:
    """Count changed keys outside ignored path prefixes and judge significance."""
    report = DriftReport()
    results = list(results)
    if not options.enabled or not results:
        return report

    changed_paths: set[str] = set()
    for entry in results:
        if any(entry.path.startswith(prefix) for prefix in options.ignore_paths):
            continue
        report.total_keys += 1
        if entry.change != Change.UNCHANGED:
            report.changed_keys += 1
            changed_paths.add(entry.path)

    if report.total_keys:
        report.drift_percent = report.changed_keys / report.total_keys * 100
    report.significant = report.drift_percent >= options.threshold
    report.changed_paths = sorted(changed_paths)
    return report