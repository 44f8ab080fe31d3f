"""Removal of keys duplicated across several secret paths."""

from __future__ import annotations

from dataclasses import dataclass

Secrets = dict[str, dict[str, str]]


@dataclass
class DedupeOptions:
    """Controls how duplicate keys across paths are resolved."""

    enabled: bool = False
    case_sensitive: bool = True
    prefer_longer_path: bool = False

    def normalize(self, key: str) -> str:
        return key if self.case_sensitive else key.lower()


def dedupe_secrets(secrets: Secrets, options: DedupeOptions) -> Secrets:
    """Keep each key only at the path that owns it.

    The first path to carry a key owns it, unless ``prefer_longer_path`` is set,
    in which case a strictly longer path takes ownership. Paths left with no keys
    are dropped. The input is not mutated.
    """
    if not options.enabled:
        return secrets

    owners: dict[str, str] = {}
    for path, kv in secrets.items():
        for key in kv:
            norm = options.normalize(key)
            current = owners.get(norm)
            if current is None or (options.prefer_longer_path and len(path) > len(current)):
                owners[norm] = path

    result: Secrets = {}
    for path, kv in secrets.items():
        kept = {key: value for key, value in kv.items() if owners.get(options.normalize(key)) == path}
        if kept:
            result[path] = kept
    return result