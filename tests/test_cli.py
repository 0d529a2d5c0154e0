"""Tests for the command-line interface and report rendering."""

import io
import json
from pathlib import Path

import pytest

from sqlcheck import CheckConfig, SQLChecker
from sqlcheck.cli import main
from sqlcheck.report import RULE_LINE, render_json, render_text
from sqlcheck.result import CheckReport, EntryKind, ReportEntry
from sqlcheck.statement import Statement


@pytest.fixture
def schema(tmp_path: Path) -> Path:
    path = tmp_path / "schema.sql"
    path.write_text(
        "CREATE TABLE users (id INT, password VARCHAR(64));\n"
        "SELECT * FROM users WHERE email IS NULL;\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def clean(tmp_path: Path) -> Path:
    path = tmp_path / "clean.sql"
    path.write_text("SELECT name FROM users WHERE user_id = 1;\n", encoding="utf-8")
    return path


class TestMain:
    """Test the sqlcheck command."""

    def test_findings_exit_code(self, schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(schema)]) == 1
        out = capsys.readouterr().out
        assert "SQL Statement #1: CREATE TABLE users (id INT, password VARCHAR(64))" in out
        assert "(ERROR) Readable Passwords" in out
        assert "(ERROR) SELECT *" in out
        assert "Summary" in out

    def test_clean_exit_code(self, clean: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(clean)]) == 0
        assert "All Anti-Patterns and Hints :: 0" in capsys.readouterr().out

    def test_reads_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("SELECT * FROM t;"))
        assert main([]) == 1
        assert "SELECT *" in capsys.readouterr().out

    def test_category_filter(self, schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-f", str(schema), "-c", "application", "--format", "json"])
        payload = json.loads(capsys.readouterr().out)
        assert [f["rule_id"] for f in payload["findings"]] == ["readable-passwords"]

    def test_risk_level(self, schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-f", str(schema), "-r", "error", "--format", "json"])
        payload = json.loads(capsys.readouterr().out)
        assert {f["severity"] for f in payload["findings"]} == {"error"}

    def test_disable_rule(self, schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-f", str(schema), "--disable", "select-star", "--format", "json"])
        payload = json.loads(capsys.readouterr().out)
        assert "select-star" not in [f["rule_id"] for f in payload["findings"]]

    def test_unknown_category_is_rejected(self, schema: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["-f", str(schema), "-c", "schema"])
        assert exc.value.code == 2

    def test_invalid_threshold_is_rejected(self, schema: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["-f", str(schema), "--join-count-threshold", "0"])
        assert exc.value.code == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["-f", str(tmp_path / "missing.sql")]) == 2

    def test_list_rules(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--list-rules"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 29
        assert lines[0].startswith("multi-valued-attribute")

    def test_workers(self, schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-f", str(schema), "--format", "json"])
        serial = capsys.readouterr().out
        main(["-f", str(schema), "--format", "json", "--workers", "4"])
        assert capsys.readouterr().out == serial


class TestRendering:
    """Test text and JSON rendering."""

    SQL = "SELECT * FROM t WHERE a IS NULL;"

    def test_verbose_includes_advice(self) -> None:
        config = CheckConfig()
        text = render_text(SQLChecker(config).check_sql(self.SQL), config)
        assert "● Inefficiency in moving data to the consumer:" in text

    def test_quiet_omits_advice(self) -> None:
        config = CheckConfig(verbose=False)
        text = render_text(SQLChecker(config).check_sql(self.SQL), config)
        assert "[Query] (ERROR) SELECT *" in text
        assert "●" not in text

    def test_no_statement(self) -> None:
        config = CheckConfig(print_statement=False)
        text = render_text(SQLChecker(config).check_sql(self.SQL), config)
        assert "SQL Statement" not in text

    def test_color(self) -> None:
        config = CheckConfig()
        text = render_text(SQLChecker(config).check_sql(self.SQL), config, color=True)
        assert "\033[31m[Query] (ERROR) SELECT *\033[0m" in text

    def test_occurrence_count_is_shown(self) -> None:
        config = CheckConfig(verbose=False)
        report = SQLChecker(config).check_sql("SELECT a FROM t WHERE a IS NULL OR b IS NULL;")
        assert "NULL Usage [matched 2 times]" in render_text(report, config)

    def test_json(self) -> None:
        report = SQLChecker().check_sql(self.SQL)
        payload = json.loads(render_json(report))
        assert payload["statements_checked"] == 1
        assert payload["summary"] == {"info": 1, "warn": 0, "error": 1}
        first = payload["findings"][0]
        assert first["rule_id"] == "select-star"
        assert first["statement_index"] == 0
        assert first["category"] == "query"
        assert first["occurrences"] == 1

    def test_finding_entry_without_finding_renders_nothing(self) -> None:
        entry = ReportEntry(EntryKind.FINDING, 0, Statement.from_sql("select 1"))
        report = CheckReport(entries=(entry,), statements_checked=1)
        text = render_text(report, CheckConfig())
        assert text.startswith(RULE_LINE + "\n")
        assert "All Anti-Patterns and Hints :: 0" in text
