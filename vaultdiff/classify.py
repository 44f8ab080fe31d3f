"""Classification of secrets into named tiers by path or key prefix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

Secrets = dict[str, dict[str, str]]

CLASS_KEY = "_class"


@dataclass
class ClassifyRule:
    """Maps a path prefix or key prefix to a classification tag."""

    path_prefix: str = ""
    key_prefix: str = ""
    tag: str = ""

    def matches(self, path: str, kv: Mapping[str, str]) -> bool:
        if self.path_prefix and path.startswith(self.path_prefix):
            return True
        if self.key_prefix:
            return any(key.startswith(self.key_prefix) for key in kv)
        return False


@dataclass
class ClassifyOptions:
    """Controls how secrets are classified."""

    enabled: bool = False
    rules: list[ClassifyRule] = field(default_factory=list)
    default_tag: str = "unclassified"


def _resolve_class(path: str, kv: Mapping[str, str], options: ClassifyOptions) -> str:
    for rule in options.rules:
        if rule.matches(path, kv):
            return rule.tag
    return options.default_tag


def classify_secrets(secrets: Secrets, options: ClassifyOptions) -> Secrets:
    """Return a copy of ``secrets`` with a ``_class`` key added to every path.

    The first matching rule wins; otherwise the default tag is used.
    """
    if not options.enabled or not secrets:
        return secrets
    return {
        path: {**kv, CLASS_KEY: _resolve_class(path, kv, options)}
        for path, kv in secrets.items()
    }