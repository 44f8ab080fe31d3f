from datetime import datetime, timedelta, timezone

import pytest

from vaultdiff.checkpoint import (
    Checkpoint,
    CheckpointError,
    CheckpointOptions,
    load_checkpoint,
    new_checkpoint,
    save_checkpoint,
)


def test_new_checkpoint_fields_set():
    secrets = {"secret/app": {"username": "admin"}}
    before = datetime.now(timezone.utc)
    cp = new_checkpoint("test", secrets)
    assert cp.name == "test"
    assert cp.secrets["secret/app"]["username"] == "admin"
    assert cp.created_at >= before
    assert cp.created_at.tzinfo is not None


def test_new_checkpoint_none_secrets_becomes_empty():
    cp = new_checkpoint("empty", None)
    assert cp.secrets == {}


def test_save_and_load_round_trip(tmp_path):
    opts = CheckpointOptions(enabled=True, dir=str(tmp_path), max_age=timedelta(hours=1))
    cp = new_checkpoint("roundtrip", {"secret/db": {"pass": "password"}})
    save_checkpoint(opts, cp)
    loaded = load_checkpoint(opts, "roundtrip")
    assert loaded.name == "roundtrip"
    assert loaded.secrets["secret/db"]["pass"] == "password"
    assert abs(loaded.created_at - cp.created_at) < timedelta(seconds=1)


def test_load_missing_file(tmp_path):
    opts = CheckpointOptions(dir=str(tmp_path))
    with pytest.raises(CheckpointError, match="not found"):
        load_checkpoint(opts, "nonexistent")


def test_load_expired(tmp_path):
    opts = CheckpointOptions(enabled=True, dir=str(tmp_path), max_age=timedelta(milliseconds=1))
    cp = new_checkpoint("old", None)
    cp.created_at = datetime.now(timezone.utc) - timedelta(hours=1)
    save_checkpoint(opts, cp)
    with pytest.raises(CheckpointError, match="expired"):
        load_checkpoint(opts, "old")


def test_zero_max_age_never_expires(tmp_path):
    opts = CheckpointOptions(enabled=True, dir=str(tmp_path), max_age=timedelta(0))
    cp = Checkpoint(
        name="ancient",
        created_at=datetime(2000, 1, 1, tzinfo=timezone.utc),
        secrets={"a": {"b": "c"}},
    )
    save_checkpoint(opts, cp)
    loaded = load_checkpoint(opts, "ancient")
    assert loaded.created_at == datetime(2000, 1, 1, tzinfo=timezone.utc)


def test_save_creates_dir(tmp_path):
    directory = tmp_path / "nested" / "checkpoints"
    opts = CheckpointOptions(enabled=True, dir=str(directory), max_age=timedelta(hours=1))
    path = save_checkpoint(opts, new_checkpoint("init", None))
    assert path == directory / "init.json"
    assert (directory / "init.json").is_file()


def test_saved_file_uses_utc_z_timestamp(tmp_path):
    opts = CheckpointOptions(dir=str(tmp_path))
    cp = Checkpoint(
        name="fixed",
        created_at=datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
        secrets={},
    )
    path = save_checkpoint(opts, cp)
    assert '"created_at": "2024-01-15T10:00:00Z"' in path.read_text()


def test_load_accepts_nanosecond_timestamps(tmp_path):
    (tmp_path / "nano.json").write_text(
        '{"name": "nano", "created_at": "2024-01-15T10:00:00.123456789Z", "secrets": null}'
    )
    loaded = load_checkpoint(CheckpointOptions(dir=str(tmp_path), max_age=timedelta(0)), "nano")
    assert loaded.created_at == datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
    assert loaded.secrets == {}


def test_load_malformed_json(tmp_path):
    (tmp_path / "bad.json").write_text("{not json")
    with pytest.raises(CheckpointError, match="decode"):
        load_checkpoint(CheckpointOptions(dir=str(tmp_path)), "bad")


def test_default_options():
    opts = CheckpointOptions()
    assert opts.enabled is False
    assert opts.dir == ".vaultdiff"
    assert opts.max_age == timedelta(hours=24)