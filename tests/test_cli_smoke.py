"""Smoke tests for the mdprep CLI"""

import json

import pytest
from typer.testing import CliRunner

from mdprep.cli.cli import app
from mdprep.core.utils.hashing import fingerprint


runner = CliRunner()

DOC = "import X from 'x'\n\n# Hello\n\nWorld.\n"


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from a temp directory against a temp database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDPREP_DB_URL", f"sqlite:///{tmp_path / 'cli.db'}")


@pytest.fixture(name="doc_file")
def doc_file_fixture(tmp_path):
    f = tmp_path / "Hello World.mdx"
    f.write_text(DOC, encoding="utf-8")
    return f


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "precompute" in result.output


def test_cli_precompute(doc_file):
    result = runner.invoke(app, ["precompute", str(doc_file), "--toc"])
    assert result.exit_code == 0
    bundle = json.loads(result.output)
    assert bundle["content_hash"] == fingerprint(DOC)
    assert bundle["toc"] == [{"url": "#hello", "title": "Hello", "items": []}]
    assert bundle["search_text"] == "Hello World."


def test_cli_strip_esm(doc_file):
    result = runner.invoke(app, ["strip-esm", str(doc_file)])
    assert result.exit_code == 0
    assert "import" not in result.output
    assert "# Hello" in result.output


def test_cli_missing_file(tmp_path):
    result = runner.invoke(app, ["precompute", str(tmp_path / "nope.md")])
    assert result.exit_code == 1


def test_cli_commit_verify_refresh(doc_file):
    """commit stores a document; verify and refresh report a clean database."""
    result = runner.invoke(app, ["commit", str(doc_file), "--toc"])
    assert result.exit_code == 0
    assert "created: hello-world" in result.output

    result = runner.invoke(app, ["commit", str(doc_file), "--toc"])
    assert "unchanged: hello-world" in result.output

    result = runner.invoke(app, ["verify"])
    assert result.exit_code == 0
    assert "up to date" in result.output

    result = runner.invoke(app, ["refresh"])
    assert result.exit_code == 0
    assert "Refreshed 0 document(s)." in result.output


def test_cli_init_reset():
    result = runner.invoke(app, ["init", "--reset"])
    assert result.exit_code == 0
    assert "Existing data cleared." in result.output
