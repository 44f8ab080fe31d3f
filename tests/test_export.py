import io
import json

import pytest

from vaultdiff.export import ExportFormat, ExportOptions, export_secrets


def test_json():
    data = {"secret/app": {"DB_PASS": "secret", "API_KEY": "placeholder"}}
    buf = io.StringIO()
    export_secrets(buf, data, ExportOptions())
    assert json.loads(buf.getvalue()) == data
    assert buf.getvalue().endswith("\n")


def test_csv():
    buf = io.StringIO()
    export_secrets(buf, {"secret/app": {"KEY": "value"}}, ExportOptions(format=ExportFormat.CSV))
    assert buf.getvalue() == "secret/app,KEY,value\n"


def test_env():
    buf = io.StringIO()
    export_secrets(buf, {"secret/app": {"TOKEN": "token"}}, ExportOptions(format=ExportFormat.ENV))
    assert buf.getvalue() == "TOKEN=token\n"


def test_env_sorted():
    data = {"b": {"Z": "1", "A": "2"}, "a": {"M": "3"}}
    buf = io.StringIO()
    export_secrets(buf, data, ExportOptions(format="env"))
    assert buf.getvalue() == "M=3\nA=2\nZ=1\n"


def test_unsupported_format():
    with pytest.raises(ValueError, match="unsupported export format"):
        export_secrets(io.StringIO(), {}, ExportOptions(format="xml"))


def test_default_options():
    opts = ExportOptions()
    assert opts.format == ExportFormat.JSON
    assert opts.path_label == "path"


def test_multiple_paths_csv():
    data = {"secret/b": {"K2": "v2"}, "secret/a": {"K1": "v1"}}
    buf = io.StringIO()
    export_secrets(buf, data, ExportOptions(format=ExportFormat.CSV))
    assert buf.getvalue().splitlines() == ["secret/a,K1,v1", "secret/b,K2,v2"]


def test_csv_quotes_commas():
    buf = io.StringIO()
    export_secrets(buf, {"p": {"k": "a,b"}}, ExportOptions(format=ExportFormat.CSV))
    assert buf.getvalue() == 'p,k,"a,b"\n'