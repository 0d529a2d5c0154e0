"""Checker that runs the rule catalog over statements and aggregates findings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor

from .config import CheckConfig
from .evaluator import evaluate
from .result import CheckReport, EntryKind, ReportEntry
from .rules import Finding, Rule, get_all_rules
from .splitter import split_statements
from .statement import Statement

logger = logging.getLogger(__name__)


class SQLChecker:
    """Runs every applicable rule over statements, in catalog order.

    Statements are independent of each other, so they may be evaluated on a
    thread pool. The report is always in statement input order, and the
    findings of one statement are always in catalog order.

    Example:
        >>> checker = SQLChecker(CheckConfig(enabled_categories={"query"}))
        >>> report = checker.check_sql("SELECT * FROM users;")
        >>> [f.rule_id for f in report.findings]
        ['select-star']
    """

    def __init__(self, config: CheckConfig | None = None) -> None:
        """Initialize the checker.

        Args:
            config: Run configuration. If None, uses defaults.
        """
        self.config = config or CheckConfig()
        self._rules: tuple[Rule, ...] = get_all_rules()

    @property
    def rules(self) -> tuple[Rule, ...]:
        """All rules in catalog order."""
        return self._rules

    def get_active_rules(self) -> list[Rule]:
        """Get only the rules that would actually run."""
        return [r for r in self._rules if self.config.should_run_rule(r)]

    def check_statement(self, statement: Statement | str) -> list[Finding]:
        """Run every rule against one statement.

        Args:
            statement: A Statement, or raw SQL text that will be normalized.

        Returns:
            Findings in catalog order.
        """
        if isinstance(statement, str):
            statement = Statement.from_sql(statement)

        findings: list[Finding] = []
        for rule in self._rules:
            finding = evaluate(self.config, statement, rule)
            if finding is not None:
                findings.append(finding)
        return findings

    def run(self, statements: Iterable[Statement | str], workers: int = 1) -> Iterator[ReportEntry]:
        """Check statements and yield the ordered report stream.

        For every statement with at least one finding, a STATEMENT entry is
        yielded first (when print_statement is enabled), followed by one
        FINDING entry per finding. Statements without findings yield nothing.

        Args:
            statements: Statements (or raw SQL strings) in input order.
            workers: Number of threads used to evaluate statements.

        Yields:
            Report entries in statement order, then catalog order.
        """
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields results in submission order
                yield from self._entries(enumerate(pool.map(self._checked, statements)))
        else:
            yield from self._entries(enumerate(map(self._checked, statements)))

    def _checked(self, statement: Statement | str) -> tuple[Statement, list[Finding]]:
        if isinstance(statement, str):
            statement = Statement.from_sql(statement)
        return statement, self.check_statement(statement)

    def _entries(
        self, results: Iterable[tuple[int, tuple[Statement, list[Finding]]]]
    ) -> Iterator[ReportEntry]:
        for index, (statement, findings) in results:
            if not findings:
                continue
            if self.config.print_statement:
                yield ReportEntry(kind=EntryKind.STATEMENT, index=index, statement=statement)
            for finding in findings:
                yield ReportEntry(
                    kind=EntryKind.FINDING, index=index, statement=statement, finding=finding
                )

    def check_sql(self, sql: str, workers: int = 1) -> CheckReport:
        """Split a SQL script into statements and check all of them.

        Args:
            sql: SQL script, possibly holding several statements.
            workers: Number of threads used to evaluate statements.

        Returns:
            CheckReport with the ordered entries.
        """
        raw_statements = split_statements(
            sql, delimiter=self.config.delimiter, dialect=self.config.dialect
        )
        statements = [Statement.from_sql(s) for s in raw_statements]
        entries = tuple(self.run(statements, workers=workers))
        report = CheckReport(entries=entries, statements_checked=len(statements))

        logger.info(
            "Checked %d statement(s), %d finding(s)",
            report.statements_checked,
            len(report.findings),
        )
        return report


def check(sql: str, config: CheckConfig | None = None, workers: int = 1) -> CheckReport:
    """Check a SQL script for anti-patterns.

    This is the simplest way to use sqlcheck. For repeated checks with the
    same configuration, create an SQLChecker instance instead.

    Args:
        sql: SQL script to check.
        config: Run configuration. If None, uses defaults.
        workers: Number of threads used to evaluate statements.

    Returns:
        CheckReport whose truth value is True when no anti-pattern was found.

    Examples:
        >>> import sqlcheck
        >>> bool(sqlcheck.check("SELECT name FROM users WHERE user_id = 1;"))
        True
        >>> [f.rule_id for f in sqlcheck.check("SELECT * FROM users;").findings]
        ['select-star']
    """
    return SQLChecker(config).check_sql(sql, workers=workers)
