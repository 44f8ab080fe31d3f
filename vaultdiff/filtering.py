"""Selection of secrets by path prefix and excluded keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class FilterOptions:
    """Controls which secrets take part in a diff."""

    prefix: str = ""
    exclude_keys: list[str] = field(default_factory=list)


def filter_secrets(
    secrets: Mapping[str, Mapping[str, Any]], options: FilterOptions
) -> dict[str, dict[str, Any]]:
    """Return a new map holding only paths under the prefix, minus excluded keys.

    Paths left with no keys are dropped.
    """
    excluded = set(options.exclude_keys)
    result: dict[str, dict[str, Any]] = {}
    for path, kv in secrets.items():
        if options.prefix and not path.startswith(options.prefix):
            continue
        kept = {key: value for key, value in kv.items() if key not in excluded}
        if kept:
            result[path] = kept
    return result