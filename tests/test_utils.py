"""Tests for input loading and output writing."""
import logging

import pytest
import requests

from sqlconsts.utils import (
    SourceLoadError,
    load_sql,
    load_sql_from_file,
    load_sql_from_url,
    load_template,
    write_output,
)


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)


class TestLoadSqlFromFile:
    """Test reading SQL from disk."""

    def test_reads_file(self, schema_file, schema_sql):
        source, sql = load_sql_from_file(schema_file)

        assert source == str(schema_file)
        assert sql == schema_sql

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceLoadError, match="no such file"):
            load_sql_from_file(tmp_path / "missing.sql")

    def test_non_sql_extension_warns(self, tmp_path, caplog):
        path = tmp_path / "schema.txt"
        path.write_text("CREATE TABLE t (a int);", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            load_sql_from_file(path)

        assert "does not have a SQL extension" in caplog.text

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "schema.sql"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(SourceLoadError, match="unable to read"):
            load_sql_from_file(path)


class TestLoadSqlFromUrl:
    """Test fetching SQL over HTTP."""

    def test_fetches_text(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse("CREATE TABLE t (a int);")

        monkeypatch.setattr(requests, "get", fake_get)

        source, sql = load_sql_from_url("https://example.com/schema.sql", timeout=5)

        assert source == "https://example.com/schema.sql"
        assert sql == "CREATE TABLE t (a int);"
        assert calls == [("https://example.com/schema.sql", 5)]

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, timeout: FakeResponse(status_code=404)
        )

        with pytest.raises(SourceLoadError, match="HTTP error 404"):
            load_sql_from_url("https://example.com/missing.sql")

    def test_connection_error(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(requests, "get", fake_get)

        with pytest.raises(SourceLoadError, match="Connection error"):
            load_sql_from_url("https://example.com/schema.sql")

    def test_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(requests, "get", fake_get)

        with pytest.raises(SourceLoadError, match="Request timeout"):
            load_sql_from_url("https://example.com/schema.sql")

    def test_invalid_url(self):
        with pytest.raises(SourceLoadError, match="Invalid URL"):
            load_sql_from_url("not-a-url")


class TestLoadSql:
    """Test source selection."""

    def test_requires_a_source(self):
        with pytest.raises(SourceLoadError, match="must be provided"):
            load_sql()

    def test_rejects_both_sources(self, schema_file):
        with pytest.raises(SourceLoadError, match="Cannot specify both"):
            load_sql(file_path=schema_file, url="https://example.com/schema.sql")

    def test_file_source(self, schema_file, schema_sql):
        assert load_sql(file_path=schema_file)[1] == schema_sql


class TestTemplatesAndOutput:
    """Test template loading and output writing."""

    def test_load_template(self, tmp_path):
        path = tmp_path / "consts.j2"
        path.write_text("{{ package_name }}", encoding="utf-8")

        assert load_template(path) == "{{ package_name }}"

    def test_load_missing_template(self, tmp_path):
        with pytest.raises(SourceLoadError):
            load_template(tmp_path / "missing.j2")

    def test_write_output_overwrites(self, tmp_path):
        path = tmp_path / "tables.py"
        path.write_text("old contents\n", encoding="utf-8")

        write_output("x = 1\n", path)

        assert path.read_text(encoding="utf-8") == "x = 1\n"

    def test_write_output_failure(self, tmp_path):
        with pytest.raises(SourceLoadError, match="error creating output file"):
            write_output("x = 1\n", tmp_path / "missing_dir" / "tables.py")
