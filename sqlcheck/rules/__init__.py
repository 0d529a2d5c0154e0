"""Anti-pattern rule catalog for sqlcheck.

Rules are plain data. Each one names a category, a severity, a guard on the
statement, a pattern (static or built from the statement) and a match policy.
The evaluator applies them without knowing about any particular rule.

Architecture:
    - Rule: Frozen description of one anti-pattern
    - MatchPolicy: Any match, a minimum match count, or a minimum length
    - Finding: A rule that fired on a statement
    - RuleRegistry: Ordered catalog, populated by the catalog modules
      (logical, physical, query, application)

Usage:
    from sqlcheck.rules import get_all_rules

    for rule in get_all_rules():
        print(f"[{rule.category.label}] {rule.title}")
"""

from .base import (
    Category,
    Finding,
    MatchKind,
    MatchPolicy,
    Rule,
    Severity,
    count_at_least,
    length_at_least,
)
from .registry import RuleRegistry, get_all_rules, get_registry, get_rule

__all__ = [
    "Category",
    "Finding",
    "MatchKind",
    "MatchPolicy",
    "Rule",
    "Severity",
    "count_at_least",
    "length_at_least",
    "RuleRegistry",
    "get_all_rules",
    "get_registry",
    "get_rule",
]
