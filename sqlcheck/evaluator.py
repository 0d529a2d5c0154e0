"""Match evaluation: decides whether a single rule fires on a statement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .rules import Finding, MatchKind

if TYPE_CHECKING:
    from .config import CheckConfig
    from .rules import Rule
    from .statement import Statement

logger = logging.getLogger(__name__)


def count_matches(rule: Rule, statement: Statement) -> int:
    """Count non-overlapping matches of the rule's pattern in the statement."""
    pattern = rule.pattern_for(statement)
    if pattern is None:
        return 0
    return sum(1 for _ in pattern.finditer(statement.text))


def evaluate(config: CheckConfig, statement: Statement, rule: Rule) -> Finding | None:
    """Evaluate one rule against one statement.

    Steps, in order:
    1. Skip rules filtered out by the configuration (category, severity, id).
    2. Skip rules whose guard rejects the statement.
    3. Measure the statement: statement length for length-based policies,
       otherwise the number of pattern matches.
    4. Report a finding if the rule's policy accepts the measurement.

    Args:
        config: Run configuration.
        statement: Normalized statement.
        rule: Rule to evaluate.

    Returns:
        A Finding if the rule fired, otherwise None. Empty statements never
        produce findings.
    """
    if not statement.text:
        return None
    if not config.should_run_rule(rule):
        return None
    if not rule.guard(statement):
        return None

    policy = rule.policy
    threshold = config.threshold_for(policy)

    if policy.kind is MatchKind.LENGTH_AT_LEAST:
        if not policy.fires(len(statement.text), threshold):
            return None
        occurrences = 1
    else:
        occurrences = count_matches(rule, statement)
        if not policy.fires(occurrences, threshold):
            return None

    logger.debug("Rule %s fired (%d occurrence(s))", rule.rule_id, occurrences)
    return Finding(statement=statement, rule=rule, occurrences=occurrences)
