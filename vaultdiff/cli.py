"""Command line interface: diff secrets between two Vault paths."""

from __future__ import annotations

import argparse
import contextlib
import os
import sys
from dataclasses import dataclass
from typing import Sequence

from vaultdiff.annotate import AnnotateOptions
from vaultdiff.audit import AuditEntry, AuditLogger, AuditOptions
from vaultdiff.auth import AuthConfig, AuthError, AuthMethod, auth_config_from_env, authenticate
from vaultdiff.classify import ClassifyOptions, ClassifyRule
from vaultdiff.client import VaultClient, VaultError
from vaultdiff.compare import CompareOptions
from vaultdiff.concurrency import ConcurrencyOptions, fetch_all_concurrent
from vaultdiff.diff import compare, format_result
from vaultdiff.export import ExportFormat, ExportOptions, export_secrets
from vaultdiff.filtering import FilterOptions, filter_secrets

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass
class SnapshotOptions:
    """Where to save or load a snapshot of the left-side secrets."""

    save_path: str = ""
    load_path: str = ""


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean value: {text!r}")


def _csv_list(text: str) -> list[str]:
    return text.split(",") if text else []


def _string_map(text: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for pair in _csv_list(text):
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"{pair} must be formatted as key=value")
        result[key] = value
    return result


class _MergeMap(argparse.Action):
    """Merges repeated key=value flags into one mapping."""

    def __call__(self, parser, namespace, values, option_string=None):
        merged = dict(getattr(namespace, self.dest) or {})
        merged.update(values)
        setattr(namespace, self.dest, merged)


class _FlagParser(argparse.ArgumentParser):
    """Argument parser whose boolean flags also accept ``--flag=true|false``."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bool_flags: set[str] = set()

    def add_bool_flag(self, name: str, default: bool, help: str) -> None:
        self.add_argument(
            f"--{name}", action=argparse.BooleanOptionalAction, default=default, help=help
        )
        self._bool_flags.add(name)

    def _normalize(self, args: list[str]) -> list[str]:
        out: list[str] = []
        for position, token in enumerate(args):
            if token == "--":
                out.extend(args[position:])
                break
            if token.startswith("--") and "=" in token:
                name, value = token[2:].split("=", 1)
                if name in self._bool_flags:
                    try:
                        enabled = _parse_bool(value)
                    except ValueError as exc:
                        self.error(f"--{name}: {exc}")
                    out.append(f"--{name}" if enabled else f"--no-{name}")
                    continue
            out.append(token)
        return out

    def parse_known_args(self, args=None, namespace=None):
        if args is None:
            args = sys.argv[1:]
        return super().parse_known_args(self._normalize(list(args)), namespace)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every flag the command accepts."""
    parser = _FlagParser(
        prog="vaultdiff",
        description="Diff secrets between two HashiCorp Vault paths",
    )
    parser.add_argument("paths", nargs=2, metavar=("PATH1", "PATH2"))

    parser.add_argument("--address", default="", help="Vault server address (overrides VAULT_ADDR)")
    parser.add_argument("--token", default="", help="Vault token (overrides VAULT_TOKEN)")
    parser.add_argument("--namespace", default="", help="Vault namespace")
    parser.add_argument("--role-id", default="", help="AppRole role ID (overrides VAULT_ROLE_ID)")
    parser.add_argument(
        "--secret-id", default="", help="AppRole secret ID (overrides VAULT_SECRET_ID)"
    )

    parser.add_bool_flag("annotate", False, "inject source metadata tags into each secret")
    parser.add_argument(
        "--annotate-tag-key",
        default="_vaultdiff_source",
        help="key name used for the injected source tag",
    )
    parser.add_argument(
        "--annotate-tag-value",
        default="",
        help="static value for the source tag (defaults to secret path)",
    )
    parser.add_argument(
        "--annotate-path-prefix",
        default="",
        help="path prefix to strip when deriving tag value from path",
    )
    parser.add_argument(
        "--annotate-custom-tags",
        type=_string_map,
        action=_MergeMap,
        default=None,
        help="additional key=value tags injected into every secret",
    )

    parser.add_bool_flag("audit", False, "enable audit logging of accessed secret paths")
    parser.add_bool_flag("audit-redact", True, "redact secret values in audit log (show keys only)")
    parser.add_argument(
        "--audit-file", default="", help="write audit log to file instead of stderr"
    )

    parser.add_bool_flag("classify", False, "Enable secret classification")
    parser.add_argument(
        "--classify-default-tag",
        default="unclassified",
        help="Default tag when no rule matches",
    )
    parser.add_argument(
        "--classify-path-rules",
        type=_csv_list,
        action="extend",
        default=None,
        help="Path-prefix rules in the form 'prefix=tag' (repeatable)",
    )
    parser.add_argument(
        "--classify-key-rules",
        type=_csv_list,
        action="extend",
        default=None,
        help="Key-prefix rules in the form 'prefix=tag' (repeatable)",
    )

    parser.add_bool_flag("compare-ignore-case", False, "Ignore case when comparing secret values")
    parser.add_bool_flag(
        "compare-ignore-whitespace", False, "Ignore leading/trailing whitespace in values"
    )
    parser.add_argument(
        "--compare-ignore-keys",
        type=_csv_list,
        action="extend",
        default=None,
        help="Keys to exclude from field-level comparison",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=ConcurrencyOptions().workers,
        help="number of parallel workers for fetching secrets",
    )

    parser.add_argument(
        "--export-format", default="json", help="Export format for secrets: json, csv, env"
    )
    parser.add_argument(
        "--export-file",
        default="",
        help="Write exported secrets to this file (default: stdout)",
    )

    parser.add_argument(
        "--prefix", default="", help="Only compare secrets whose path starts with this prefix"
    )
    parser.add_argument(
        "--exclude-keys",
        type=_csv_list,
        action="extend",
        default=None,
        help="Comma-separated list of secret keys to exclude from comparison",
    )

    parser.add_argument(
        "--snapshot-save",
        default="",
        help="write a snapshot of the left-side secrets to this JSON file",
    )
    parser.add_argument(
        "--snapshot-load",
        default="",
        help="load left-side secrets from a previously saved snapshot file instead of Vault",
    )
    return parser


def resolve_annotate_options(args: argparse.Namespace) -> AnnotateOptions:
    """Build AnnotateOptions from parsed arguments."""
    return AnnotateOptions(
        enabled=args.annotate,
        tag_key=args.annotate_tag_key,
        tag_value=args.annotate_tag_value,
        path_prefix=args.annotate_path_prefix,
        custom_tags=dict(args.annotate_custom_tags or {}),
    )


def resolve_audit_options(args: argparse.Namespace) -> AuditOptions:
    """Build AuditOptions; opens the audit file for appending when one is given.

    Raises OSError if the audit file cannot be opened.
    """
    options = AuditOptions(enabled=args.audit, redact_values=args.audit_redact)
    if args.audit_file:
        fd = os.open(args.audit_file, os.O_CREAT | os.O_APPEND | os.O_WRONLY, 0o600)
        options.writer = os.fdopen(fd, "a", encoding="utf-8")
    return options


def resolve_auth_config(args: argparse.Namespace) -> AuthConfig:
    """Build an AuthConfig from the environment, overridden by flags."""
    config = auth_config_from_env()
    if args.token:
        config.method = AuthMethod.TOKEN
        config.token = args.token
    if args.role_id:
        config.role_id = args.role_id
        config.method = AuthMethod.APPROLE
    if args.secret_id:
        config.secret_id = args.secret_id
        config.method = AuthMethod.APPROLE
    return config


def _parse_rules(raw: list[str] | None) -> list[tuple[str, str]]:
    pairs = []
    for rule in raw or []:
        prefix, sep, tag = rule.partition("=")
        if sep:
            pairs.append((prefix, tag))
    return pairs


def resolve_classify_options(args: argparse.Namespace) -> ClassifyOptions:
    """Build ClassifyOptions; malformed rules without ``=`` are skipped."""
    rules = [
        ClassifyRule(path_prefix=prefix, tag=tag)
        for prefix, tag in _parse_rules(args.classify_path_rules)
    ]
    rules += [
        ClassifyRule(key_prefix=prefix, tag=tag)
        for prefix, tag in _parse_rules(args.classify_key_rules)
    ]
    return ClassifyOptions(
        enabled=args.classify,
        default_tag=args.classify_default_tag,
        rules=rules,
    )


def resolve_compare_options(args: argparse.Namespace) -> CompareOptions:
    """Build CompareOptions from parsed arguments."""
    return CompareOptions(
        ignore_case=args.compare_ignore_case,
        ignore_whitespace=args.compare_ignore_whitespace,
        ignore_keys=list(args.compare_ignore_keys or []),
    )


def resolve_concurrency_options(args: argparse.Namespace) -> ConcurrencyOptions:
    """Build ConcurrencyOptions; a non-positive worker count falls back to the default."""
    if args.workers is None or args.workers <= 0:
        return ConcurrencyOptions()
    return ConcurrencyOptions(workers=args.workers)


def resolve_export_options(args: argparse.Namespace) -> tuple[ExportOptions, str]:
    """Return the export options and the target file path ("" means stdout).

    Raises ValueError for an unknown export format.
    """
    fmt = args.export_format
    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        raise ValueError(
            f'unknown export format "{fmt}": must be one of json, csv, env'
        ) from None
    return ExportOptions(format=export_format), args.export_file


def resolve_filter_options(args: argparse.Namespace) -> FilterOptions:
    """Build FilterOptions, dropping empty key names."""
    return FilterOptions(
        prefix=args.prefix,
        exclude_keys=[key for key in args.exclude_keys or [] if key],
    )


def resolve_snapshot_options(args: argparse.Namespace) -> SnapshotOptions:
    """Read the snapshot save and load paths."""
    return SnapshotOptions(save_path=args.snapshot_save, load_path=args.snapshot_load)


def _run(args: argparse.Namespace) -> int:
    left_path, right_path = args.paths

    filter_options = resolve_filter_options(args)
    concurrency = resolve_concurrency_options(args)
    export_options, export_file = resolve_export_options(args)

    with contextlib.ExitStack() as stack:
        audit_options = resolve_audit_options(args)
        if args.audit_file:
            stack.enter_context(audit_options.writer)
        logger = AuditLogger(audit_options)

        client = VaultClient(args.address, args.token, args.namespace)
        authenticate(client, resolve_auth_config(args))

        fetched = fetch_all_concurrent([left_path, right_path], concurrency, client.read_secrets)
        sides: list[dict[str, str]] = []
        for source, result in zip(("left", "right"), fetched):
            if result.error is not None:
                raise VaultError(
                    f"failed to read secrets from {result.path}: {result.error}"
                ) from result.error
            secrets = result.secrets or {}
            logger.log(AuditEntry(path=result.path, keys=sorted(secrets), source=source))
            sides.append(filter_secrets({result.path: secrets}, filter_options).get(result.path, {}))
        left, right = sides

    if export_file:
        with open(export_file, "w", encoding="utf-8") as fh:
            export_secrets(fh, {left_path: left, right_path: right}, export_options)

    result = compare(left, right)
    sys.stdout.write(format_result(result))
    return 1 if result.has_differences() else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns 1 when differences are found or on error."""
    args = build_parser().parse_args(argv)
    try:
        return _run(args)
    except (VaultError, AuthError, OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1