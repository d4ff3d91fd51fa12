"""Tests for the administration CLI"""
import json

import httpx
import pytest
from click.testing import CliRunner

from tfidf_cli import cli as cli_module
from tfidf_cli.api_client import GatewayClient
from tfidf_cli.cli import cli
from tfidf_cli.db_utils import collect_text_files


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, database_url):
    def _invoke(*args):
        return runner.invoke(cli, ["--database-url", database_url, *args])
    return _invoke


@pytest.fixture
def corpus_dir(tmp_path):
    docs = tmp_path / "docs"
    (docs / "nested").mkdir(parents=True)
    (docs / "cat.txt").write_text("the cat sat")
    (docs / "dog.md").write_text("the dog sat")
    (docs / "image.png").write_bytes(b"\x89PNG")
    (docs / "nested" / "bird.txt").write_text("a bird flew")
    return docs


def test_db_init_and_stats(invoke):
    result = invoke("db", "init")
    assert result.exit_code == 0
    assert "Database initialized successfully" in result.output

    result = invoke("db", "stats")
    assert result.exit_code == 0
    assert "Documents:    0" in result.output
    assert "Words:        0" in result.output


def test_collect_text_files(corpus_dir):
    assert [p.name for p in collect_text_files(corpus_dir)] == ["cat.txt", "dog.md"]
    assert len(collect_text_files(corpus_dir, recursive=True)) == 3
    assert collect_text_files(corpus_dir / "cat.txt") == [corpus_dir / "cat.txt"]


def test_ingest_and_show_siblings(invoke, corpus_dir):
    invoke("db", "init")

    result = invoke("documents", "ingest", str(corpus_dir))
    assert result.exit_code == 0
    assert "Read 2 files, 2 new documents, corpus size 2" in result.output

    result = invoke("db", "stats")
    assert "Documents:    2" in result.output
    assert "Words:        4" in result.output

    result = invoke("documents", "siblings")
    assert result.exit_code == 0
    assert "cat (id=1)" in result.output
    assert "dog" in result.output


def test_ingest_counts_only_new_documents(invoke, corpus_dir):
    """A second file with an indexed title is read but not added"""
    (corpus_dir / "nested" / "cat.txt").write_text("an entirely different cat")
    invoke("db", "init")

    result = invoke("documents", "ingest", str(corpus_dir), "--recursive")
    assert result.exit_code == 0
    assert "Read 4 files, 3 new documents, corpus size 3" in result.output

    result = invoke("documents", "ingest", str(corpus_dir / "cat.txt"))
    assert "Read 1 files, 0 new documents, corpus size 3" in result.output


def test_siblings_on_empty_store(invoke):
    invoke("db", "init")
    result = invoke("documents", "siblings")
    assert result.exit_code == 0
    assert "No documents found." in result.output


def test_reset_requires_confirm(invoke, corpus_dir):
    invoke("db", "init")
    invoke("documents", "ingest", str(corpus_dir))

    result = invoke("db", "reset")
    assert "Use --confirm" in result.output

    result = invoke("db", "reset", "--confirm")
    assert result.exit_code == 0
    assert "Documents:    0" in invoke("db", "stats").output


def test_stats_without_schema_fails(invoke):
    result = invoke("db", "stats")
    assert result.exit_code == 1


def _mock_gateway(monkeypatch, handler):
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        cli_module,
        "GatewayClient",
        lambda: GatewayClient(base_url="http://gateway.test", transport=transport),
    )


def test_push_sends_document(runner, monkeypatch, tmp_path):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "message": "OK",
            "documents": [
                {"id": 1, "title": "A", "siblings": [{"id": 2, "similarity": 0.5}]},
                {"id": 2, "title": "Report", "siblings": [{"id": 1, "similarity": 0.5}]},
            ],
        })

    _mock_gateway(monkeypatch, handler)
    source = tmp_path / "report.txt"
    source.write_text("quarterly numbers")

    result = runner.invoke(cli, ["documents", "push", "Report", "--file", str(source)])

    assert result.exit_code == 0
    assert seen == {
        "method": "PUT",
        "path": "/pushDocument",
        "body": {"title": "Report", "content": "quarterly numbers"},
    }
    assert "0.5000  Report" in result.output


def test_push_needs_exactly_one_source(runner):
    result = runner.invoke(cli, ["documents", "push", "Report"])
    assert result.exit_code == 2


def test_push_reports_gateway_errors(runner, monkeypatch):
    _mock_gateway(monkeypatch, lambda request: httpx.Response(503))

    result = runner.invoke(cli, ["documents", "push", "Report", "--text", "words"])

    assert result.exit_code == 1
    assert "Error pushing document" in result.output


def test_health(runner, monkeypatch):
    _mock_gateway(monkeypatch, lambda request: httpx.Response(200, json={"status": "healthy"}))

    result = runner.invoke(cli, ["health"])

    assert result.exit_code == 0
    assert "Gateway healthy" in result.output
