"""Tests for the sqlconsts command-line interface."""
import json

import pytest

from sqlconsts.cli import main


class TestGenerateToStdout:
    """Test the default stdout output."""

    def test_generates_all_tables(self, schema_file, capsys):
        exit_code = main([str(schema_file)])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert out.startswith("# Code generated by sqlconsts; DO NOT EDIT.\n")
        assert "class Users:" in out
        assert "class Posts:" in out

    def test_stdout_is_valid_python(self, schema_file, capsys):
        main([str(schema_file)])
        namespace = {}
        exec(capsys.readouterr().out, namespace)

        assert namespace["Posts"].UserID == "user_id"

    def test_table_allowlist(self, schema_file, capsys):
        exit_code = main(["--tables", "users", str(schema_file)])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "class Users:" in out
        assert "class Posts:" not in out

    def test_package_name(self, schema_file, capsys):
        main(["--package", "schema", str(schema_file)])

        assert "constants for the schema package" in capsys.readouterr().out

    def test_config_file(self, schema_file, tmp_path, capsys):
        config = tmp_path / "sqlconsts.json"
        config.write_text(json.dumps({"package_name": "fromfile"}), encoding="utf-8")

        exit_code = main(["--config", str(config), str(schema_file)])

        assert exit_code == 0
        assert "constants for the fromfile package" in capsys.readouterr().out

    def test_unsupported_statement_is_logged(self, tmp_path, capsys):
        path = tmp_path / "schema.sql"
        path.write_text(
            "CREATE TABLE users (id int4);\nINSERT INTO users VALUES (1);\n",
            encoding="utf-8",
        )

        exit_code = main([str(path)])
        captured = capsys.readouterr()

        assert exit_code == 0
        assert "class Users:" in captured.out
        assert "unexpected statement type" in captured.err

    def test_verbose_shows_metadata(self, schema_file, capsys):
        exit_code = main(["--verbose", str(schema_file)])

        assert exit_code == 0
        assert "Table Count" in capsys.readouterr().err


class TestGenerateToFile:
    """Test writing to an output file."""

    def test_writes_output_file(self, schema_file, tmp_path, capsys):
        output = tmp_path / "tables.py"

        exit_code = main(["-o", str(output), str(schema_file)])

        assert exit_code == 0
        assert "class Users:" in output.read_text(encoding="utf-8")
        assert capsys.readouterr().out == ""

    def test_broken_template_leaves_no_file(self, schema_file, tmp_path, capsys):
        template = tmp_path / "broken.j2"
        template.write_text("{% for table in tables %}", encoding="utf-8")
        output = tmp_path / "tables.py"

        exit_code = main(
            ["--template", str(template), "-o", str(output), str(schema_file)]
        )

        assert exit_code == 1
        assert not output.exists()
        assert "unable to parse template" in capsys.readouterr().err

    def test_malformed_output_dumps_raw_text(self, schema_file, tmp_path, capsys):
        template = tmp_path / "malformed.j2"
        template.write_text("class {{ package_name }} oops\n", encoding="utf-8")
        output = tmp_path / "tables.py"
        output.write_text("previous\n", encoding="utf-8")

        exit_code = main(
            ["--template", str(template), "-o", str(output), str(schema_file)]
        )
        captured = capsys.readouterr()

        assert exit_code == 1
        assert "class models oops\n" in captured.err
        assert captured.out == ""
        assert output.read_text(encoding="utf-8") == "previous\n"


class TestFailures:
    """Test exit codes for failures."""

    def test_name_collision_leaves_no_file(self, tmp_path, capsys):
        path = tmp_path / "audit.sql"
        path.write_text(
            "CREATE TABLE audit (id int, table_name text);", encoding="utf-8"
        )
        output = tmp_path / "tables.py"

        exit_code = main(["-o", str(output), str(path)])

        assert exit_code == 1
        assert not output.exists()
        assert "name collision" in capsys.readouterr().err

    def test_missing_sql_file(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.sql")])

        assert exit_code == 1
        assert "unable to open" in capsys.readouterr().err

    def test_invalid_sql(self, tmp_path, capsys):
        path = tmp_path / "schema.sql"
        path.write_text("SELECT * FROM (", encoding="utf-8")

        assert main([str(path)]) == 1
        assert "error parsing sql" in capsys.readouterr().err

    def test_bad_config_file(self, schema_file, tmp_path):
        config = tmp_path / "sqlconsts.json"
        config.write_text("{not json", encoding="utf-8")

        assert main(["--config", str(config), str(schema_file)]) == 1

    def test_no_input(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2

    def test_file_and_url_are_exclusive(self, schema_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["--url", "https://example.com/schema.sql", str(schema_file)])

        assert exc_info.value.code == 2
