"""Named snapshots of secrets persisted as JSON files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

Secrets = dict[str, dict[str, str]]

_FRACTION = re.compile(r"(\.\d{6})\d+")
_EPOCH_ZERO = datetime(1, 1, 1, tzinfo=timezone.utc)


class CheckpointError(Exception):
    """Raised when a checkpoint cannot be saved, read or used."""


@dataclass
class CheckpointOptions:
    """Controls where checkpoints live and how old they may be."""

    enabled: bool = False
    dir: str = ".vaultdiff"
    max_age: timedelta = timedelta(hours=24)


@dataclass
class Checkpoint:
    """A named snapshot of secrets at a point in time."""

    name: str
    created_at: datetime
    secrets: Secrets = field(default_factory=dict)

    def to_json(self) -> dict:
        stamp = self.created_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        return {"name": self.name, "created_at": stamp, "secrets": self.secrets}


def _parse_timestamp(text: str) -> datetime:
    text = _FRACTION.sub(r"\1", text.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    stamp = datetime.fromisoformat(text)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def _checkpoint_path(directory: str, name: str) -> Path:
    return Path(directory) / f"{name}.json"


def new_checkpoint(name: str, secrets: Secrets | None) -> Checkpoint:
    """Create a checkpoint stamped with the current UTC time."""
    return Checkpoint(
        name=name,
        created_at=datetime.now(timezone.utc),
        secrets=secrets if secrets is not None else {},
    )


def save_checkpoint(options: CheckpointOptions, checkpoint: Checkpoint) -> Path:
    """Write ``checkpoint`` to ``<dir>/<name>.json`` and return the file path."""
    directory = Path(options.dir)
    try:
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as exc:
        raise CheckpointError(f"checkpoint: create dir: {exc}") from exc
    path = _checkpoint_path(options.dir, checkpoint.name)
    try:
        with path.open("w", encoding="utf-8") as fh:
            json.dump(checkpoint.to_json(), fh, indent=2, ensure_ascii=False)
            fh.write("\n")
    except OSError as exc:
        raise CheckpointError(f"checkpoint: create file: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise CheckpointError(f"checkpoint: encode: {exc}") from exc
    return path


def load_checkpoint(options: CheckpointOptions, name: str) -> Checkpoint:
    """Read the checkpoint called ``name``.

    Raises CheckpointError if it is missing, unreadable, malformed, or older
    than ``options.max_age`` when that is positive.
    """
    path = _checkpoint_path(options.dir, name)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CheckpointError(f"checkpoint {name!r} not found") from None
    except OSError as exc:
        raise CheckpointError(f"checkpoint: read: {exc}") from exc

    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        stamp = data.get("created_at")
        created_at = _parse_timestamp(stamp) if stamp else _EPOCH_ZERO
        checkpoint = Checkpoint(
            name=data.get("name") or "",
            created_at=created_at,
            secrets=data.get("secrets") or {},
        )
    except (ValueError, TypeError) as exc:
        raise CheckpointError(f"checkpoint: decode: {exc}") from exc

    if options.max_age > timedelta(0):
        age = datetime.now(timezone.utc) - checkpoint.created_at
        if age > options.max_age:
            rounded = timedelta(seconds=round(age.total_seconds()))
            raise CheckpointError(
                f"checkpoint {name!r} expired (age {rounded} > max {options.max_age})"
            )
    return checkpoint