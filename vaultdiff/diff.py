"""Key-level diff of two flat secret maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass
class DiffResult:
    """Outcome of comparing two flat secret maps."""

    only_in_left: dict[str, str] = field(default_factory=dict)
    only_in_right: dict[str, str] = field(default_factory=dict)
    modified: dict[str, tuple[str, str]] = field(default_factory=dict)
    unchanged: dict[str, str] = field(default_factory=dict)

    def has_differences(self) -> bool:
        """Return True if any key was added, removed or modified."""
        return bool(self.only_in_left or self.only_in_right or self.modified)

    def summary(self) -> str:
        """Return a one-line human-readable summary of the counts."""
        return (
            f"added: {len(self.only_in_right)}, "
            f"removed: {len(self.only_in_left)}, "
            f"modified: {len(self.modified)}, "
            f"unchanged: {len(self.unchanged)}"
        )


def compare(left: Mapping[str, str], right: Mapping[str, str]) -> DiffResult:
    """Diff two flat secret maps."""
    result = DiffResult()
    for key, left_value in left.items():
        if key in right:
            right_value = right[key]
            if left_value == right_value:
                result.unchanged[key] = left_value
            else:
                result.modified[key] = (left_value, right_value)
        else:
            result.only_in_left[key] = left_value
    for key, right_value in right.items():
        if key not in left:
            result.only_in_right[key] = right_value
    return result


def format_result(result: DiffResult) -> str:
    """Render a diff result as human-readable text, keys sorted within each section."""
    lines = [f"- {key} = {result.only_in_left[key]}" for key in sorted(result.only_in_left)]
    lines += [f"+ {key} = {result.only_in_right[key]}" for key in sorted(result.only_in_right)]
    for key in sorted(result.modified):
        old, new = result.modified[key]
        lines.append(f"~ {key}: {old} -> {new}")
    if not result.has_differences():
        lines.append("No differences found.")
    return "".join(f"{line}\n" for line in lines)