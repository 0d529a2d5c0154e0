"""Tests for statement normalization and classification."""

import dataclasses

import pytest

from sqlcheck.statement import (
    Statement,
    extract_table_name,
    is_create_table,
    is_ddl,
    normalize,
)


class TestNormalize:
    """Test text normalization."""

    def test_lowercases_and_collapses_whitespace(self) -> None:
        assert normalize("  SELECT\n  *\tFROM   Users ") == "select * from users"

    def test_empty_input(self) -> None:
        assert normalize("   \n ") == ""


class TestClassifier:
    """Test the DDL / CREATE TABLE predicates."""

    @pytest.mark.parametrize(
        "text",
        [
            "create table t (a int)",
            "alter table t add column b int",
            "xcreate tablex",  # substring match, not keyword match
        ],
    )
    def test_is_ddl(self, text: str) -> None:
        assert is_ddl(text) is True

    @pytest.mark.parametrize("text", ["select * from t", "insert into t values (1)", ""])
    def test_is_not_ddl(self, text: str) -> None:
        assert is_ddl(text) is False

    def test_alter_table_is_not_create_table(self) -> None:
        assert is_create_table("alter table t add column b int") is False
        assert is_create_table("create table t (a int)") is True


class TestExtractTableName:
    """Test table name extraction."""

    def test_trims_whitespace_and_keeps_case(self) -> None:
        assert extract_table_name("create table   Users (id int)") == "Users"

    def test_stops_at_parenthesis(self) -> None:
        assert extract_table_name("create table users(id int)") == "users"

    def test_missing_create_table(self) -> None:
        assert extract_table_name("select * from users") is None

    def test_nothing_after_keyword(self) -> None:
        assert extract_table_name("create table") is None

    def test_if_not_exists_is_taken_literally(self) -> None:
        """Lexical extraction takes the first token after the keyword."""
        assert extract_table_name("create table if not exists t (a int)") == "if"


class TestStatement:
    """Test the Statement value type."""

    def test_from_sql_normalizes_and_derives_facts(self) -> None:
        stmt = Statement.from_sql("CREATE TABLE Foo (\n  id INT\n)")
        assert stmt.text == "create table foo ( id int )"
        assert stmt.raw == "CREATE TABLE Foo (\n  id INT\n)"
        assert stmt.is_ddl is True
        assert stmt.is_create_table is True
        assert stmt.table_name == "foo"

    def test_non_ddl_statement(self) -> None:
        stmt = Statement.from_sql("SELECT 1")
        assert stmt.is_ddl is False
        assert stmt.is_create_table is False
        assert stmt.table_name is None

    def test_raw_defaults_to_text(self) -> None:
        assert Statement("select 1").raw == "select 1"

    def test_is_immutable(self) -> None:
        stmt = Statement("select 1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            stmt.text = "select 2"  # type: ignore[misc]
