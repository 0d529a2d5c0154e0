"""sqlcheck - detect anti-patterns in SQL schemas and queries.

sqlcheck lints SQL text before it is deployed. It looks for well-known
anti-patterns in logical and physical schema design, in query construction
and in application-level security hygiene. Detection is lexical (regular
expressions over lowercased, whitespace-collapsed text); no AST is built.

Quick Start:
    >>> import sqlcheck

    # Check a script (all categories, all severities by default)
    >>> report = sqlcheck.check("SELECT * FROM users;")
    >>> [f.rule_id for f in report.findings]
    ['select-star']

    # A clean script has a truthy report
    >>> bool(sqlcheck.check("SELECT name FROM users WHERE user_id = 1;"))
    True

    # With custom configuration
    >>> from sqlcheck import CheckConfig, SQLChecker
    >>> config = CheckConfig(minimum_severity="warn", enabled_categories={"logical"})
    >>> checker = SQLChecker(config)
    >>> checker.check_statement("select * from t")
    []

Categories:
    - logical: Logical database design (keys, multi-valued attributes, EAV)
    - physical: Physical database design (data types, indexes, files)
    - query: Query construction (SELECT *, NULL handling, JOIN counts)
    - application: Application hygiene (readable passwords)

Known limitation:
    Keywords are found by substring search, so they also match inside
    identifiers, string literals and comments (e.g. ``id`` inside ``paid``).
"""

from __future__ import annotations

from .checker import SQLChecker, check
from .config import CheckConfig
from .exceptions import ConfigurationError, SQLCheckError
from .result import CheckReport, EntryKind, ReportEntry
from .rules import Category, Finding, Rule, Severity, get_all_rules
from .statement import Statement, extract_table_name, is_create_table, is_ddl, normalize

__version__ = "0.1.0"
__all__ = [
    # Main API
    "check",
    "SQLChecker",
    "CheckConfig",
    # Types
    "CheckReport",
    "EntryKind",
    "ReportEntry",
    "Statement",
    "Rule",
    "Finding",
    "Category",
    "Severity",
    "get_all_rules",
    # Classification
    "normalize",
    "is_ddl",
    "is_create_table",
    "extract_table_name",
    # Exceptions
    "SQLCheckError",
    "ConfigurationError",
]
