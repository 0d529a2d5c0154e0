"""Report types produced by the checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .rules import Severity

if TYPE_CHECKING:
    from .rules import Category, Finding
    from .statement import Statement


class EntryKind(str, Enum):
    STATEMENT = "statement"
    FINDING = "finding"


@dataclass(frozen=True)
class ReportEntry:
    """One item of the ordered report stream.

    A STATEMENT entry introduces the offending statement; the FINDING entries
    that follow belong to it.

    Attributes:
        kind: Whether this is a statement header or a finding.
        index: Zero-based position of the statement in the input.
        statement: The statement this entry refers to.
        finding: The finding (None for statement headers).
    """

    kind: EntryKind
    index: int
    statement: Statement
    finding: Finding | None = None

    @property
    def severity(self) -> Severity | None:
        return self.finding.severity if self.finding else None

    @property
    def category(self) -> Category | None:
        return self.finding.category if self.finding else None

    @property
    def title(self) -> str | None:
        return self.finding.title if self.finding else None

    @property
    def message(self) -> str | None:
        return self.finding.message if self.finding else None


@dataclass(frozen=True)
class CheckReport:
    """Immutable result of checking a SQL script.

    Attributes:
        entries: Report entries, in statement order then catalog order.
        statements_checked: Number of statements that were evaluated.
    """

    entries: tuple[ReportEntry, ...] = ()
    statements_checked: int = 0
    counts: dict[Severity, int] = field(init=False)

    def __post_init__(self) -> None:
        counts = {severity: 0 for severity in Severity}
        for finding in self.findings:
            counts[finding.severity] += 1
        object.__setattr__(self, "counts", counts)

    @property
    def findings(self) -> list[Finding]:
        return [e.finding for e in self.entries if e.finding is not None]

    @property
    def has_findings(self) -> bool:
        return any(e.kind is EntryKind.FINDING for e in self.entries)

    def __bool__(self) -> bool:
        """True when no anti-patterns were found."""
        return not self.has_findings
