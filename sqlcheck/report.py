"""Rendering check reports as text or JSON."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from .result import EntryKind
from .rules import Severity

if TYPE_CHECKING:
    from .config import CheckConfig
    from .result import CheckReport, ReportEntry

RESET = "\033[0m"
BOLD = "\033[1m"
COLORS = {
    Severity.INFO: "\033[32m",  # green
    Severity.WARN: "\033[33m",  # yellow
    Severity.ERROR: "\033[31m",  # red
}
RULE_LINE = "=" * 80


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color else text


def _render_entry(entry: ReportEntry, verbose: bool, color: bool) -> list[str]:
    if entry.kind is EntryKind.STATEMENT:
        header = f"SQL Statement #{entry.index + 1}: {entry.statement.raw}"
        return [RULE_LINE, _paint(header, BOLD, color)]

    finding = entry.finding
    if finding is None:
        return []
    label = f"[{finding.category.label}] ({finding.severity.value.upper()}) {finding.title}"
    if finding.occurrences > 1:
        label += f" [matched {finding.occurrences} times]"
    lines = [_paint(label, COLORS[finding.severity], color)]
    if verbose:
        lines.append(finding.message.rstrip("\n"))
    return lines


def render_text(report: CheckReport, config: CheckConfig, color: bool = False) -> str:
    """Render a report for the console.

    Args:
        report: The report to render.
        config: Run configuration (verbose controls whether advice is shown).
        color: Use ANSI colours keyed by severity.

    Returns:
        The rendered text, ending with a per-severity summary.
    """
    lines: list[str] = []
    for entry in report.entries:
        lines.extend(_render_entry(entry, config.verbose, color))

    lines.append(RULE_LINE)
    lines.append(_paint("==================== Summary ===================", BOLD, color))
    lines.append(f"All Anti-Patterns and Hints :: {len(report.findings)}")
    lines.append(f">  High Risk   :: {report.counts[Severity.ERROR]}")
    lines.append(f">  Medium Risk :: {report.counts[Severity.WARN]}")
    lines.append(f">  Low Risk    :: {report.counts[Severity.INFO]}")
    return "\n".join(lines) + "\n"


def render_json(report: CheckReport) -> str:
    """Render a report as a JSON document."""
    payload = {
        "statements_checked": report.statements_checked,
        "findings": [
            {
                "statement_index": entry.index,
                "statement": entry.statement.raw,
                "rule_id": entry.finding.rule_id,
                "severity": entry.finding.severity.value,
                "category": entry.finding.category.value,
                "title": entry.finding.title,
                "message": entry.finding.message,
                "occurrences": entry.finding.occurrences,
            }
            for entry in report.entries
            if entry.finding is not None
        ],
        "summary": {severity.value: count for severity, count in report.counts.items()},
    }
    return json.dumps(payload, indent=2)
