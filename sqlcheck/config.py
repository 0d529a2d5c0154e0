"""Configuration for a sqlcheck run."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlglot.dialects.dialect import Dialect

from .exceptions import ConfigurationError
from .rules import Category, Severity, get_registry

if TYPE_CHECKING:
    from .rules import MatchPolicy, Rule

THRESHOLD_OPTIONS = (
    "index_count_threshold",
    "join_count_threshold",
    "distinct_count_threshold",
    "nesting_threshold",
    "spaghetti_length_threshold",
)


@dataclass(frozen=True)
class CheckConfig:
    """Configuration for anti-pattern checking.

    Built once per run and read-only afterwards. Every option is validated
    on construction; an invalid option raises ConfigurationError before any
    statement is looked at.

    Attributes:
        minimum_severity: Only report findings with this severity or higher.
        enabled_categories: Categories whose rules run (default: all).
        print_statement: Emit the offending statement before its findings.
        verbose: Include each rule's full advice, not just its title.
        disabled_rules: Rule IDs to skip.
        index_count_threshold: Minimum INDEX mentions for too-many-indexes.
        join_count_threshold: Minimum JOIN count for reduce-joins.
        distinct_count_threshold: Minimum DISTINCT count for eliminate-distinct.
        nesting_threshold: Minimum SELECT count for nested-subqueries.
        spaghetti_length_threshold: Minimum statement length for spaghetti-query.
        dialect: sqlglot dialect used when splitting input into statements.
        delimiter: Statement delimiter.
    """

    minimum_severity: Severity = Severity.INFO
    enabled_categories: frozenset[Category] = field(default_factory=lambda: frozenset(Category))
    print_statement: bool = True
    verbose: bool = True
    disabled_rules: frozenset[str] = field(default_factory=frozenset)
    index_count_threshold: int = 3
    join_count_threshold: int = 5
    distinct_count_threshold: int = 5
    nesting_threshold: int = 2
    spaghetti_length_threshold: int = 500
    dialect: str | None = None
    delimiter: str = ";"

    def __post_init__(self) -> None:
        object.__setattr__(self, "minimum_severity", Severity.parse(self.minimum_severity))
        object.__setattr__(
            self, "enabled_categories", self._parse_categories(self.enabled_categories)
        )
        object.__setattr__(self, "disabled_rules", self._parse_rule_ids(self.disabled_rules))

        for name in THRESHOLD_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(name, f"expected an integer, got {value!r}")
            if value < 1:
                raise ConfigurationError(name, f"must be at least 1, got {value}")

        if not self.delimiter:
            raise ConfigurationError("delimiter", "must not be empty")

        if self.dialect:
            try:
                Dialect.get_or_raise(self.dialect)
            except ValueError as e:
                raise ConfigurationError("dialect", str(e)) from None

    @staticmethod
    def _parse_categories(values: Iterable[Category | str] | str) -> frozenset[Category]:
        if isinstance(values, (str, Category)):
            values = [values]
        return frozenset(Category.parse(v) for v in values)

    @staticmethod
    def _parse_rule_ids(values: Iterable[str] | str) -> frozenset[str]:
        if isinstance(values, str):
            values = [values]
        registry = get_registry()
        rule_ids = frozenset(values)
        unknown = sorted(rule_id for rule_id in rule_ids if rule_id not in registry)
        if unknown:
            raise ConfigurationError("disabled_rules", f"unknown rule id(s): {', '.join(unknown)}")
        return rule_ids

    def should_run_rule(self, rule: Rule) -> bool:
        """Determine if a specific rule should be run."""
        if rule.category not in self.enabled_categories:
            return False
        if rule.rule_id in self.disabled_rules:
            return False
        return rule.severity.rank >= self.minimum_severity.rank

    def threshold_for(self, policy: MatchPolicy) -> int:
        """Resolve a policy's threshold, honouring configured overrides."""
        if policy.setting is None:
            return policy.threshold
        return int(getattr(self, policy.setting))
