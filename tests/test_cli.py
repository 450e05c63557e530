"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from conftest import encode, manifest_document
from hzlauncher.cli import app, load_account
from hzlauncher.exceptions import ParseError

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "versions.json").write_bytes(encode(manifest_document()))
    return data


def invoke(data_dir, *args):
    return runner.invoke(app, ["--data-dir", str(data_dir), "--log-dir", str(data_dir.parent), *args])


def test_versions_lists_releases(data_dir):
    result = invoke(data_dir, "versions")
    assert result.exit_code == 0, result.output
    assert "Latest release: 1.20.1" in result.output
    assert "1.20.1\trelease\t2023-06-12" in result.output
    assert "23w31a\tsnapshot" not in result.output


def test_versions_with_snapshots(data_dir):
    result = invoke(data_dir, "versions", "--snapshots")
    assert "23w31a\tsnapshot" in result.output


def test_play_requires_account(data_dir):
    result = invoke(data_dir, "play", "1.20.1")
    assert result.exit_code != 0


def test_load_account(tmp_path, account):
    path = tmp_path / "account.json"
    path.write_text(account.model_dump_json())
    assert load_account(path) == account

    path.write_text("{}")
    with pytest.raises(ParseError):
        load_account(path)
