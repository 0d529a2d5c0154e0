"""Statement normalization and classification.

All classification is lexical: it looks for literal substrings in the
normalized text rather than tokenized keywords, so identifiers that happen to
contain ``create table`` (or ``id``) are matched as well.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

CREATE_TABLE = "create table"
ALTER_TABLE = "alter table"

_WHITESPACE = re.compile(r"\s+")
_TABLE_NAME = re.compile(r"[^\s(]+")


def normalize(sql: str) -> str:
    """Lowercase and collapse whitespace runs into single spaces."""
    return _WHITESPACE.sub(" ", sql).strip().lower()


def is_ddl(text: str) -> bool:
    """Check whether the statement creates or alters a table."""
    return CREATE_TABLE in text or ALTER_TABLE in text


def is_create_table(text: str) -> bool:
    return CREATE_TABLE in text


def extract_table_name(text: str) -> str | None:
    """Extract the table name following ``create table``.

    The name is the first token after the keyword, ending at whitespace or an
    opening parenthesis. Case is preserved.

    Examples:
        >>> extract_table_name("create table   Users (id int)")
        'Users'
        >>> extract_table_name("select 1") is None
        True
    """
    found = text.find(CREATE_TABLE)
    if found == -1:
        return None

    rest = _WHITESPACE.sub(" ", text[found + len(CREATE_TABLE) :]).strip()
    match = _TABLE_NAME.match(rest)
    return match.group(0) if match else None


@dataclass(frozen=True)
class Statement:
    """A single normalized SQL statement and the facts derived from it.

    Attributes:
        text: Normalized statement text that rules are matched against.
        raw: Statement as it appeared in the input, used for display.
        is_ddl: Whether the text contains CREATE TABLE or ALTER TABLE.
        is_create_table: Whether the text contains CREATE TABLE.
        table_name: Name following CREATE TABLE, if any.
    """

    text: str
    raw: str = ""
    is_ddl: bool = field(init=False)
    is_create_table: bool = field(init=False)
    table_name: str | None = field(init=False)

    def __post_init__(self) -> None:
        if not self.raw:
            object.__setattr__(self, "raw", self.text)
        object.__setattr__(self, "is_ddl", is_ddl(self.text))
        object.__setattr__(self, "is_create_table", is_create_table(self.text))
        object.__setattr__(self, "table_name", extract_table_name(self.text))

    @classmethod
    def from_sql(cls, sql: str) -> Statement:
        """Build a statement from raw SQL, normalizing it first."""
        return cls(text=normalize(sql), raw=sql.strip())
