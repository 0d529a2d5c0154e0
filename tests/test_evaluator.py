"""Tests for single-rule evaluation."""

import re

import pytest

from sqlcheck import CheckConfig
from sqlcheck.evaluator import count_matches, evaluate
from sqlcheck.rules import Category, Rule, Severity, count_at_least, get_all_rules, get_rule
from sqlcheck.statement import Statement


@pytest.fixture
def config() -> CheckConfig:
    return CheckConfig()


class TestEvaluate:
    """Test the evaluation steps of a single rule."""

    def test_fires_with_occurrence_count(self, config: CheckConfig) -> None:
        stmt = Statement.from_sql("select a from t where a is null or b is null")
        finding = evaluate(config, stmt, get_rule("null-usage"))
        assert finding is not None
        assert finding.occurrences == 2
        assert finding.statement is stmt
        assert finding.severity == Severity.INFO
        assert finding.category == Category.QUERY
        assert finding.title == "NULL Usage"
        assert finding.message == get_rule("null-usage").message

    def test_no_match(self, config: CheckConfig) -> None:
        stmt = Statement.from_sql("select a from t")
        assert evaluate(config, stmt, get_rule("null-usage")) is None

    def test_guard_blocks_rule(self, config: CheckConfig) -> None:
        """DDL-only rules are skipped on queries even when the pattern matches."""
        stmt = Statement.from_sql("select id from t where x = 1")
        assert count_matches(get_rule("generic-primary-key"), stmt) == 1
        assert evaluate(config, stmt, get_rule("generic-primary-key")) is None

    def test_disabled_category(self) -> None:
        config = CheckConfig(enabled_categories={"logical"})
        stmt = Statement.from_sql("select * from t")
        assert evaluate(config, stmt, get_rule("select-star")) is None

    def test_severity_floor(self) -> None:
        config = CheckConfig(minimum_severity="error")
        stmt = Statement.from_sql("select a from t where a is null")
        assert evaluate(config, stmt, get_rule("null-usage")) is None

    def test_count_policy_uses_configured_threshold(self) -> None:
        stmt = Statement.from_sql("select a from t join u on t.k = u.k join v on v.k = u.k")
        assert evaluate(CheckConfig(), stmt, get_rule("reduce-joins")) is None
        finding = evaluate(CheckConfig(join_count_threshold=2), stmt, get_rule("reduce-joins"))
        assert finding is not None
        assert finding.occurrences == 2

    def test_length_policy_reports_single_occurrence(self, config: CheckConfig) -> None:
        stmt = Statement("select " + "a" * 600)
        finding = evaluate(config, stmt, get_rule("spaghetti-query"))
        assert finding is not None
        assert finding.occurrences == 1

    def test_length_threshold_override(self) -> None:
        stmt = Statement("select " + "a" * 50)
        rule = get_rule("spaghetti-query")
        assert evaluate(CheckConfig(), stmt, rule) is None
        assert evaluate(CheckConfig(spaghetti_length_threshold=50), stmt, rule) is not None

    @pytest.mark.parametrize("sql", ["", "   ", "((((''''", ";;;", "\x00\x01"])
    def test_malformed_input_never_raises(self, config: CheckConfig, sql: str) -> None:
        stmt = Statement.from_sql(sql)
        for rule in get_all_rules():
            evaluate(config, stmt, rule)

    def test_empty_statement_has_no_findings(self) -> None:
        """Even a length-based rule with threshold 1 stays quiet on empty text."""
        config = CheckConfig(spaghetti_length_threshold=1)
        assert evaluate(config, Statement(""), get_rule("spaghetti-query")) is None


class TestCustomRule:
    """New rules work without any change to the evaluator."""

    def test_custom_rule(self, config: CheckConfig) -> None:
        rule = Rule(
            rule_id="truncate-usage",
            title="TRUNCATE Usage",
            category=Category.QUERY,
            severity=Severity.WARN,
            message="● Avoid TRUNCATE.\n",
            pattern=re.compile(r"truncate"),
            policy=count_at_least(2),
        )
        once = Statement.from_sql("truncate table a")
        twice = Statement.from_sql("truncate table a; truncate table b")
        assert evaluate(config, once, rule) is None
        finding = evaluate(config, twice, rule)
        assert finding is not None
        assert finding.occurrences == 2

    def test_pattern_factory(self, config: CheckConfig) -> None:
        rule = Rule(
            rule_id="self-named-column",
            title="Column Named After Table",
            category=Category.LOGICAL,
            severity=Severity.INFO,
            message="● Rename the column.\n",
            guard=lambda s: s.table_name is not None,
            pattern_factory=lambda s: re.compile(rf"\(\s*{re.escape(s.table_name)}\s"),
        )
        stmt = Statement.from_sql("create table users (users int)")
        assert evaluate(config, stmt, rule) is not None
        assert evaluate(config, Statement.from_sql("select users from t"), rule) is None
