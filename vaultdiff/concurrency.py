"""Parallel fetching of secrets with a bounded worker pool."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable

Fetcher = Callable[[str], dict[str, str]]


@dataclass
class ConcurrencyOptions:
    """Controls how many workers fetch secrets at once."""

    workers: int = 5


@dataclass
class FetchResult:
    """Outcome of fetching one path: its secrets, or the error raised."""

    path: str
    secrets: dict[str, str] | None = None
    error: Exception | None = None


def _fetch_one(fetch: Fetcher, path: str) -> FetchResult:
    try:
        return FetchResult(path=path, secrets=fetch(path))
    except Exception as exc:  # each failure is reported per path
        return FetchResult(path=path, error=exc)


def fetch_all_concurrent(
    paths: Iterable[str],
    options: ConcurrencyOptions | None,
    fetch: Fetcher,
) -> list[FetchResult]:
    """Fetch every path with at most ``options.workers`` calls running at once.

    Errors raised by ``fetch`` are captured in the matching result. Results
    follow the order of ``paths``.
    """
    paths = list(paths)
    if not paths:
        return []
    workers = (options or ConcurrencyOptions()).workers
    if workers <= 0:
        workers = 1
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda path: _fetch_one(fetch, path), paths))