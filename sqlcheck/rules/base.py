"""Base types for anti-pattern rules."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..statement import Statement


class Severity(str, Enum):
    """Severity levels for rule findings.

    ERROR: Design or query flaw that is almost always a mistake
    WARN: Likely problem, worth a second look
    INFO: Hint about a construct that is easy to misuse
    """

    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER[self]

    @classmethod
    def parse(cls, value: Severity | str) -> Severity:
        """Coerce a string such as ``"WARN"`` into a Severity."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                "minimum_severity", f"unknown severity '{value}' (expected one of: {choices})"
            ) from None


_SEVERITY_ORDER = {
    Severity.INFO: 1,
    Severity.WARN: 2,
    Severity.ERROR: 3,
}


class Category(str, Enum):
    """Anti-pattern categories, in catalog order."""

    LOGICAL = "logical"
    PHYSICAL = "physical"
    QUERY = "query"
    APPLICATION = "application"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def rank(self) -> int:
        return list(Category).index(self)

    @classmethod
    def parse(cls, value: Category | str) -> Category:
        """Coerce a category name (case-insensitive) into a Category."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(c.value for c in cls)
            raise ConfigurationError(
                "enabled_categories", f"unknown category '{value}' (expected one of: {choices})"
            ) from None


_CATEGORY_LABELS = {
    Category.LOGICAL: "Logical Database Design",
    Category.PHYSICAL: "Physical Database Design",
    Category.QUERY: "Query",
    Category.APPLICATION: "Application",
}


class MatchKind(str, Enum):
    ANY = "any"
    COUNT_AT_LEAST = "count_at_least"
    LENGTH_AT_LEAST = "length_at_least"


@dataclass(frozen=True)
class MatchPolicy:
    """Decides whether a number of matches is enough to report a finding.

    Attributes:
        kind: How the threshold is interpreted.
        threshold: Default threshold (match count or statement length).
        setting: Name of the CheckConfig option overriding the threshold.
    """

    kind: MatchKind = MatchKind.ANY
    threshold: int = 1
    setting: str | None = None

    def fires(self, value: int, threshold: int | None = None) -> bool:
        limit = self.threshold if threshold is None else threshold
        if self.kind is MatchKind.ANY:
            return value >= 1
        return value >= limit


def count_at_least(threshold: int, setting: str | None = None) -> MatchPolicy:
    return MatchPolicy(MatchKind.COUNT_AT_LEAST, threshold, setting)


def length_at_least(threshold: int, setting: str | None = None) -> MatchPolicy:
    return MatchPolicy(MatchKind.LENGTH_AT_LEAST, threshold, setting)


def always(statement: Statement) -> bool:
    return True


def ddl_only(statement: Statement) -> bool:
    return statement.is_ddl


def create_table_only(statement: Statement) -> bool:
    return statement.is_create_table


def has_table_name(statement: Statement) -> bool:
    return statement.table_name is not None


@dataclass(frozen=True)
class Rule:
    """A single anti-pattern detection rule.

    Rules are plain data: the evaluator never needs to know about a
    particular rule. A rule has either a static ``pattern`` or a
    ``pattern_factory`` that builds one from the statement (or neither, for
    length-based policies).

    Attributes:
        rule_id: Unique identifier (e.g. 'select-star').
        title: Short human-readable title.
        category: Anti-pattern category.
        severity: Severity of findings produced by this rule.
        message: Advice shown with each finding.
        pattern: Precompiled pattern matched against normalized text.
        pattern_factory: Builds a pattern for a given statement.
        guard: Precondition on the statement; the rule is skipped when False.
        policy: How many matches are needed to report a finding.
    """

    rule_id: str
    title: str
    category: Category
    severity: Severity
    message: str
    pattern: re.Pattern[str] | None = None
    pattern_factory: Callable[[Statement], re.Pattern[str] | None] | None = None
    guard: Callable[[Statement], bool] = always
    policy: MatchPolicy = MatchPolicy()

    def pattern_for(self, statement: Statement) -> re.Pattern[str] | None:
        """Return the pattern to match against this statement."""
        if self.pattern_factory is not None:
            return self.pattern_factory(statement)
        return self.pattern


@dataclass(frozen=True)
class Finding:
    """A rule that fired on a statement.

    Attributes:
        statement: The statement the rule fired on.
        rule: The rule that fired.
        occurrences: Number of matches (1 for length-based rules).
    """

    statement: Statement
    rule: Rule
    occurrences: int = 1

    @property
    def rule_id(self) -> str:
        return self.rule.rule_id

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def category(self) -> Category:
        return self.rule.category

    @property
    def title(self) -> str:
        return self.rule.title

    @property
    def message(self) -> str:
        return self.rule.message
