from vaultdiff.diff_context import DiffContext, VaultPath


def _path(ns, mount, secret):
    return VaultPath(namespace=ns, mount=mount, secret_path=secret)


def test_fields_populated():
    ctx = DiffContext.from_paths(_path("ns1", "secret", "app/config"), _path("ns2", "secret", "app/config"))
    assert ctx.left_namespace == "ns1"
    assert ctx.right_namespace == "ns2"
    assert ctx.left_mount == "secret"
    assert ctx.right_mount == "secret"
    assert ctx.left_path == "app/config"
    assert ctx.right_path == "app/config"


def test_same_namespace():
    ctx = DiffContext.from_paths(_path("shared", "kv", "a"), _path("shared", "kv", "b"))
    assert ctx.same_namespace() is True
    ctx2 = DiffContext.from_paths(_path("ns1", "kv", "a"), _path("ns2", "kv", "b"))
    assert ctx2.same_namespace() is False


def test_same_mount():
    ctx = DiffContext.from_paths(_path("", "kv", "a"), _path("", "kv", "b"))
    assert ctx.same_mount() is True
    ctx2 = DiffContext.from_paths(_path("", "kv", "a"), _path("", "secret", "b"))
    assert ctx2.same_mount() is False


def test_summary_with_namespace():
    ctx = DiffContext.from_paths(_path("teamA", "kv", "app/prod"), _path("teamB", "kv", "app/staging"))
    assert ctx.summary() == "teamA/app/prod → teamB/app/staging"


def test_summary_no_namespace():
    ctx = DiffContext.from_paths(_path("", "kv", "app/prod"), _path("", "kv", "app/staging"))
    assert ctx.summary() == "app/prod → app/staging"


def test_summary_one_namespace():
    ctx = DiffContext.from_paths(_path("teamA", "kv", "x"), _path("", "kv", "y"))
    assert ctx.summary() == "teamA/x → y"