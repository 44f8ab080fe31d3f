"""Field-level comparison of two path-keyed secret maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

Secrets = Mapping[str, Mapping[str, str]]


@dataclass
class CompareOptions:
    """Controls how values are normalised before comparison."""

    ignore_case: bool = False
    ignore_whitespace: bool = False
    ignore_keys: list[str] = field(default_factory=list)

    def normalize(self, value: str) -> str:
        if self.ignore_whitespace:
            value = value.strip()
        if self.ignore_case:
            value = value.lower()
        return value


@dataclass(frozen=True)
class CompareResult:
    """Outcome of comparing one key at one path."""

    path: str
    key: str
    left_val: str
    right_val: str
    equal: bool


def _union(*mappings: Iterable[str]) -> list[str]:
    keys: set[str] = set()
    for mapping in mappings:
        keys.update(mapping)
    return sorted(keys)


def compare_secrets(
    left: Secrets, right: Secrets, options: CompareOptions | None = None
) -> list[CompareResult]:
    """Compare every (path, key) pair found on either side.

    Missing values count as empty strings. Results are ordered by path, then key.
    """
    options = options or CompareOptions()
    ignored = set(options.ignore_keys)
    results: list[CompareResult] = []
    for path in _union(left, right):
        left_kv = left.get(path, {})
        right_kv = right.get(path, {})
        for key in _union(left_kv, right_kv):
            if key in ignored:
                continue
            left_val = left_kv.get(key, "")
            right_val = right_kv.get(key, "")
            results.append(
                CompareResult(
                    path=path,
                    key=key,
                    left_val=left_val,
                    right_val=right_val,
                    equal=options.normalize(left_val) == options.normalize(right_val),
                )
            )
    return results