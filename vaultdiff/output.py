"""Rendering of per-key diff entries as text, JSON or Markdown."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, TextIO


class Change(str, Enum):
    """Kind of change recorded for one key."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffEntry:
    """One key's diff outcome at a path."""

    key: str
    change: Change
    path: str = ""
    left_value: str = ""
    right_value: str = ""


def escape_markdown(text: str) -> str:
    """Make a value safe for a Markdown table cell."""
    if text == "":
        return "_empty_"
    return text.replace("|", "\\|").replace("\n", " ")


def _render_text(results: Sequence[DiffEntry], out: TextIO) -> None:
    if not results:
        out.write("No differences found.\n")
        return
    for r in results:
        if r.change is Change.ADDED:
            out.write(f"+ [{r.path}] {r.key} = {r.right_value}\n")
        elif r.change is Change.REMOVED:
            out.write(f"- [{r.path}] {r.key} = {r.left_value}\n")
        elif r.change is Change.MODIFIED:
            out.write(f"~ [{r.path}] {r.key}: {r.left_value} -> {r.right_value}\n")


def _render_json(results: Sequence[DiffEntry], out: TextIO) -> None:
    entries = []
    for r in results:
        entry: dict[str, str] = {"key": r.key, "change": Change(r.change).value}
        if r.change in (Change.REMOVED, Change.MODIFIED):
            entry["left_value"] = r.left_value
        if r.change in (Change.ADDED, Change.MODIFIED):
            entry["right_value"] = r.right_value
        entries.append(entry)
    out.write(json.dumps(entries, indent=2, ensure_ascii=False))
    out.write("\n")


def _render_markdown(results: Sequence[DiffEntry], out: TextIO) -> None:
    if not results:
        out.write("## Vault Diff\n\nNo differences found.\n")
        return
    out.write("## Vault Diff\n\n")
    out.write("| Path | Key | Status | Left | Right |\n")
    out.write("|------|-----|--------|------|-------|\n")
    for r in results:
        status = Change(r.change).value.lower()
        out.write(
            f"| {r.path} | {r.key} | {status} | "
            f"{escape_markdown(r.left_value)} | {escape_markdown(r.right_value)} |\n"
        )


_RENDERERS = {
    "json": _render_json,
    "markdown": _render_markdown,
    "md": _render_markdown,
    "text": _render_text,
    "": _render_text,
}


@dataclass
class Renderer:
    """Writes diff entries in the chosen format to a text stream."""

    format: str = "text"
    writer: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, results: Sequence[DiffEntry] | None) -> None:
        """Render ``results``; raises ValueError for an unknown format."""
        renderer = _RENDERERS.get(self.format.lower())
        if renderer is None:
            raise ValueError(f"unsupported output format: {self.format}")
        renderer(list(results or []), self.writer)