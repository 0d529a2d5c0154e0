"""Reading SQL input and splitting it into statements."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

logger = logging.getLogger(__name__)


def split_statements(sql: str, delimiter: str = ";", dialect: str | None = None) -> list[str]:
    """Split a SQL script into individual statements.

    With the default ``;`` delimiter the script is tokenized with sqlglot so
    that semicolons inside string literals, quoted identifiers and comments
    do not end a statement. Any other delimiter is split on literally.

    Args:
        sql: The SQL script.
        delimiter: Statement delimiter.
        dialect: sqlglot dialect used for tokenizing.

    Returns:
        Non-empty statements, stripped, in input order.
    """
    if delimiter != ";":
        return _split_plain(sql, delimiter)

    try:
        tokens = Dialect.get_or_raise(dialect).tokenize(sql)
    except TokenError as e:
        logger.warning("Could not tokenize input (%s); splitting on ';' instead", e)
        return _split_plain(sql, delimiter)

    statements: list[str] = []
    start = 0
    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            statements.append(sql[start : token.start])
            start = token.end + 1
    statements.append(sql[start:])

    return [s.strip() for s in statements if s.strip()]


def _split_plain(sql: str, delimiter: str) -> list[str]:
    return [s.strip() for s in sql.split(delimiter) if s.strip()]


def read_sql(path: str | Path | None = None) -> str:
    """Read a SQL script from a file, or from stdin when no path is given."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")
