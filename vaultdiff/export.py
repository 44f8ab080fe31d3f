"""Export of secrets as JSON, CSV or env-file text."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, TextIO

Secrets = Mapping[str, Mapping[str, str]]


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"
    ENV = "env"


@dataclass
class ExportOptions:
    """Configures how secrets are exported."""

    format: ExportFormat | str = ExportFormat.JSON
    path_label: str = "path"


def _sorted_rows(secrets: Secrets) -> Iterator[tuple[str, str, str]]:
    for path in sorted(secrets):
        kv = secrets[path]
        for key in sorted(kv):
            yield path, key, kv[key]


def _export_json(out: TextIO, secrets: Secrets) -> None:
    out.write(json.dumps(secrets, indent=2, sort_keys=True, ensure_ascii=False))
    out.write("\n")


def _export_csv(out: TextIO, secrets: Secrets) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(_sorted_rows(secrets))


def _export_env(out: TextIO, secrets: Secrets) -> None:
    for _path, key, value in _sorted_rows(secrets):
        out.write(f"{key}={value}\n")


_EXPORTERS = {
    ExportFormat.JSON: _export_json,
    ExportFormat.CSV: _export_csv,
    ExportFormat.ENV: _export_env,
}


def export_secrets(out: TextIO, secrets: Secrets, options: ExportOptions | None = None) -> None:
    """Write ``secrets`` (path -> key -> value) to ``out`` in the configured format.

    Raises ValueError for an unsupported format.
    """
    options = options or ExportOptions()
    try:
        fmt = ExportFormat(options.format)
    except ValueError:
        raise ValueError(f"unsupported export format: {str(options.format)!r}") from None
    _EXPORTERS[fmt](out, secrets)