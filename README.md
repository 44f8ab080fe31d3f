# vaultdiff

`vaultdiff` compares the secrets stored at two HashiCorp Vault KV paths and
shows which keys were added, removed or changed between them.

## Command line

```
vaultdiff [options] PATH1 PATH2
```

Both paths are read from the same Vault server, in parallel. KV version 2
responses (`secret/data/...`) are unwrapped; KV version 1 data is used as is.

Connection and authentication:

- `--address` – Vault server address. Falls back to `VAULT_ADDR`, then to
  `http://127.0.0.1:8200`.
- `--namespace` – Vault namespace (falls back to `VAULT_NAMESPACE`).
- `--token` – Vault token. Falls back to `VAULT_TOKEN`.
- `--role-id`, `--secret-id` – log in with AppRole instead. AppRole is also
  chosen when both `VAULT_ROLE_ID` and `VAULT_SECRET_ID` are set. With token
  authentication a token is required.

Options that change what the command does:

- `--prefix` – keep only paths starting with this prefix.
- `--exclude-keys a,b` – drop these keys from both sides (repeatable).
- `--workers N` – number of parallel fetch workers (default 5; values of 0 or
  less fall back to 5).
- `--audit` – write one `[audit]` line per side read (timestamp, `left` or
  `right`, path and key names) to stderr, or to the file named by
  `--audit-file`, which is opened for appending.
- `--export-file FILE` with `--export-format json|csv|env` – after filtering,
  write both sides to `FILE` keyed by the two paths. An unknown format is an
  error.

Boolean flags take `--flag`, `--no-flag` or `--flag=true|false`.

Example:

```
VAULT_ADDR=http://localhost:8200 VAULT_TOKEN=token \
    vaultdiff secret/data/app-staging secret/data/app-production
```

Output uses one line per difference, keys sorted within each group:

```
- only_in_left = value
+ only_in_right = value
~ changed_key: old -> new
```

When both sides match, `No differences found.` is printed. The command exits
with status 1 when differences are found or when an error occurs (the error is
printed to stderr), and with status 0 otherwise. Wrong arguments exit with
status 2.

## What the command does not do

The command also accepts the flags `--annotate*`, `--classify*`,
`--compare-ignore-*`, `--audit-redact`, `--snapshot-save` and
`--snapshot-load`. They are parsed and can be turned into option objects with
the `resolve_*_options` functions in `vaultdiff.cli`, but the command itself
does not act on them: it does not annotate, classify or normalise values,
never saves or loads snapshots, and always prints the plain text format above.
There is no watch mode and no option to choose an output format; for JSON or
Markdown reports use `vaultdiff.output.Renderer` from Python.

## Library use

The building blocks are importable on their own:

- `vaultdiff.diff` – `compare(left, right)` diffs two flat key/value maps and
  returns a `DiffResult` with `has_differences()` and `summary()`;
  `format_result(result)` gives the text shown above.
- `vaultdiff.filtering` – `filter_secrets(secrets, FilterOptions(...))` keeps
  paths under a prefix, drops excluded keys and drops paths left empty.
- `vaultdiff.compare` – `compare_secrets(left, right, CompareOptions(...))`
  returns one `CompareResult` per path and key, ordered by path then key,
  optionally ignoring case, surrounding whitespace or chosen keys.
- `vaultdiff.annotate` – `annotate_secrets` adds a source tag and custom tags
  to every path.
- `vaultdiff.classify` – `classify_secrets` adds a `_class` key from the first
  matching `ClassifyRule` (path or key prefix) or the default tag.
- `vaultdiff.dedupe` – `dedupe_secrets` keeps each key at only one path.
- `vaultdiff.export` – `export_secrets(out, secrets, ExportOptions(...))`
  writes JSON, CSV rows (`path,key,value`) or `KEY=value` lines.
- `vaultdiff.cache` – `SecretCache`, a thread-safe in-memory cache with an
  optional TTL in seconds.
- `vaultdiff.checkpoint` – `new_checkpoint`, `save_checkpoint` and
  `load_checkpoint` store named secret sets as `<dir>/<name>.json`;
  `CheckpointError` is raised for missing, malformed or expired checkpoints.
- `vaultdiff.audit` – `AuditLogger` and `AuditEntry`.
- `vaultdiff.concurrency` – `fetch_all_concurrent(paths, options, fetch)`
  calls `fetch` with a bounded thread pool and records each error per path.
- `vaultdiff.output` – `Renderer(format, writer).render(entries)` for `text`,
  `json` and `markdown` reports of `DiffEntry` items.
- `vaultdiff.drift` – `detect_drift` turns `DiffEntry` items into a
  `DriftReport` with a change percentage and a significance flag.
- `vaultdiff.diff_context` – `DiffContext.from_paths` describes the two sides
  of a comparison.
- `vaultdiff.client` and `vaultdiff.auth` – `VaultClient` with
  `read_secrets` and `write`, and `authenticate` for token and AppRole
  logins; failures raise `VaultError` or `AuthError`.

```python
from vaultdiff.diff import compare, format_result

result = compare({"user": "app", "mode": "a"}, {"user": "app", "mode": "b"})
print(result.summary())
print(format_result(result))
```