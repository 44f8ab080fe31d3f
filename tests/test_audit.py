import io
import sys
from datetime import datetime, timezone

from vaultdiff.audit import AuditEntry, AuditLogger, AuditOptions


def test_disabled_writes_nothing():
    buf = io.StringIO()
    logger = AuditLogger(AuditOptions(writer=buf))
    logger.log(AuditEntry(path="secret/data/foo", keys=["api_key"], source="left"))
    assert buf.getvalue() == ""


def test_enabled_writes_line():
    buf = io.StringIO()
    logger = AuditLogger(AuditOptions(enabled=True, writer=buf))
    logger.log(
        AuditEntry(
            timestamp=datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
            path="secret/data/myapp",
            keys=["db_pass", "api_key"],
            source="right",
        )
    )
    out = buf.getvalue()
    assert "[audit]" in out
    assert "secret/data/myapp" in out
    assert "source=right" in out
    assert out == (
        "[audit] 2024-01-15T10:00:00Z source=right path=secret/data/myapp "
        "keys=[db_pass api_key]\n"
    )


def test_multiple_entries():
    buf = io.StringIO()
    logger = AuditLogger(AuditOptions(enabled=True, writer=buf))
    for _ in range(3):
        logger.log(AuditEntry(path="secret/data/item", keys=["k"], source="left"))
    lines = buf.getvalue().strip().split("\n")
    assert len(lines) == 3


def test_entry_keys_not_mutated():
    buf = io.StringIO()
    keys = ["b", "a"]
    AuditLogger(AuditOptions(enabled=True, redact_values=True, writer=buf)).log(
        AuditEntry(path="p", keys=keys, source="s")
    )
    assert keys == ["b", "a"]
    assert "keys=[b a]" in buf.getvalue()


def test_default_options():
    opts = AuditOptions()
    assert opts.enabled is False
    assert opts.redact_values is True
    assert opts.writer is sys.stderr