"""Injection of source metadata tags into secret maps."""

from __future__ import annotations

from dataclasses import dataclass, field

Secrets = dict[str, dict[str, str]]


@dataclass
class AnnotateOptions:
    """Controls how secrets are annotated with metadata tags."""

    enabled: bool = False
    tag_key: str = "_vaultdiff_source"
    tag_value: str = ""
    path_prefix: str = ""
    custom_tags: dict[str, str] = field(default_factory=dict)


def annotate_secrets(secrets: Secrets, options: AnnotateOptions) -> Secrets:
    """Return a copy of ``secrets`` with metadata tags injected into every path.

    When annotation is disabled the input is returned unchanged.
    """
    if not options.enabled:
        return secrets

    out: Secrets = {}
    for path, kv in secrets.items():
        annotated = dict(kv)
        if options.tag_key:
            tag_value = options.tag_value or path.removeprefix(options.path_prefix)
            annotated[options.tag_key] = tag_value
        annotated.update(options.custom_tags)
        out[path] = annotated
    return out