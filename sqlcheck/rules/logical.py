"""Logical database design anti-patterns."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .base import (
    Category,
    Rule,
    Severity,
    create_table_only,
    ddl_only,
    has_table_name,
)
from .registry import RuleRegistry

if TYPE_CHECKING:
    from ..statement import Statement


def _references_own_table(statement: Statement) -> re.Pattern[str] | None:
    """Match a foreign key pointing back at the table being created."""
    if statement.table_name is None:
        return None
    return re.compile(r"references\s+" + re.escape(statement.table_name))


def _is_attribute_table(statement: Statement) -> bool:
    return statement.table_name is not None and "attribute" in statement.table_name


MULTI_VALUED_ATTRIBUTE = Rule(
    rule_id="multi-valued-attribute",
    title="Multi-Valued Attribute",
    category=Category.LOGICAL,
    severity=Severity.ERROR,
    pattern=re.compile(r"(id\s+varchar)|(id\s+text)|(id\s+regexp)"),
    message=(
        "● Store each value in its own column and row:\n"
        "Storing a list of IDs as a VARCHAR/TEXT column can cause performance and data integrity\n"
        "problems. Querying against such a column would require using pattern-matching\n"
        "expressions. It is awkward and costly to join a comma-separated list to matching rows.\n"
        "This will make it harder to validate IDs. Think about what is the greatest number of\n"
        "entries this list must support? Instead of using a multi-valued attribute,\n"
        "consider storing it in a separate table, so that each individual value of that attribute\n"
        "occupies a separate row. Such an intersection table implements a many-to-many relationship\n"
        "between the two referenced tables. This will greatly simplify querying and validating\n"
        "the IDs.\n"
    ),
)

RECURSIVE_DEPENDENCY = Rule(
    rule_id="recursive-dependency",
    title="Recursive Dependency",
    category=Category.LOGICAL,
    severity=Severity.ERROR,
    guard=has_table_name,
    pattern_factory=_references_own_table,
    message=(
        "● Avoid recursive relationships:\n"
        "It's common for data to have recursive relationships. Data may be organized in a\n"
        "treelike or hierarchical way. However, creating a foreign key constraint to enforce\n"
        "the relationship between two columns in the same table lends to awkward querying.\n"
        "Each level of the tree corresponds to another join. You will need to issue recursive\n"
        "queries to get all descendants or all ancestors of a node.\n"
        "A solution is to construct an additional closure table. It involves storing all paths\n"
        "through the tree, not just those with a direct parent-child relationship.\n"
        "You might want to compare different hierarchical data designs -- closure table,\n"
        "path enumeration, nested sets -- and pick one based on your application's needs.\n"
    ),
)

PRIMARY_KEY_EXISTS = Rule(
    rule_id="primary-key-exists",
    title="Primary Key Usage",
    category=Category.LOGICAL,
    severity=Severity.WARN,
    guard=create_table_only,
    pattern=re.compile(r"primary key"),
    message=(
        "● Make sure the primary key earns its place:\n"
        "A primary key constraint is important when you need to do the following:\n"
        "prevent a table from containing duplicate rows,\n"
        "reference individual rows in queries, and\n"
        "support foreign key references.\n"
        "Check that the declared key actually identifies a row in the problem domain\n"
        "rather than being added out of habit. Use compound keys when they are appropriate,\n"
        "and do not add a surrogate column to a table that already has a natural key.\n"
    ),
)

GENERIC_PRIMARY_KEY = Rule(
    rule_id="generic-primary-key",
    title="Generic Primary Key",
    category=Category.LOGICAL,
    severity=Severity.ERROR,
    guard=ddl_only,
    pattern=re.compile(r"(\s+[\(]?id\s+)|(,id\s+)|(\s+id\s+serial)"),
    message=(
        "● Skip using a generic primary key (id):\n"
        "Adding an id column to every table causes several effects that make its\n"
        "use seem arbitrary. You might end up creating a redundant key or allow\n"
        "duplicate rows if you add this column in a compound key.\n"
        "The name id is so generic that it holds no meaning. This is especially\n"
        "important when you join two tables and they have the same primary\n"
        "key column name.\n"
    ),
)

FOREIGN_KEY_EXISTS = Rule(
    rule_id="foreign-key-exists",
    title="Foreign Key Usage",
    category=Category.LOGICAL,
    severity=Severity.WARN,
    guard=create_table_only,
    pattern=re.compile(r"foreign key"),
    message=(
        "● Declare the cascading behaviour of foreign keys:\n"
        "Foreign key constraints enforce referential integrity so that application code\n"
        "does not have to. They have another feature you can't mimic using application code:\n"
        "cascading updates to multiple tables. This feature allows you to update or delete\n"
        "the parent row and lets the database take care of any child rows that reference it.\n"
        "The way you declare the ON UPDATE or ON DELETE clauses in the foreign key constraint\n"
        "allows you to control the result of a cascading operation. Make sure every foreign\n"
        "key states the behaviour you actually want, and that the referencing columns are\n"
        "indexed. Make your database mistake-proof with constraints.\n"
    ),
)

VARIABLE_ATTRIBUTE = Rule(
    rule_id="variable-attribute",
    title="Entity-Attribute-Value Pattern",
    category=Category.LOGICAL,
    severity=Severity.WARN,
    guard=_is_attribute_table,
    pattern=re.compile(r"attribute"),
    message=(
        "● Dynamic schema with variable attributes:\n"
        "Are you trying to create a schema where you can define new attributes\n"
        "at runtime? This involves storing attributes as rows in an attribute table.\n"
        "This is referred to as the Entity-Attribute-Value or schemaless pattern.\n"
        "When you use this pattern, you sacrifice many advantages that a conventional\n"
        "database design would have given you. You can't make mandatory attributes.\n"
        "You can't enforce referential integrity. You might find that attributes are\n"
        "not being named consistently. A solution is to store all related types in one table,\n"
        "with distinct columns for every attribute that exists in any type\n"
        "(Single Table Inheritance). Use one attribute to define the subtype of a given row.\n"
        "Many attributes are subtype-specific, and these columns must\n"
        "be given a null value on any row storing an object for which the attribute\n"
        "does not apply; the columns with non-null values become sparse.\n"
        "Another solution is to create a separate table for each subtype\n"
        "(Concrete Table Inheritance). A third solution mimics inheritance,\n"
        "as though tables were object-oriented classes (Class Table Inheritance).\n"
        "Create a single table for the base type, containing attributes common to\n"
        "all subtypes. Then for each subtype, create another table, with a primary key\n"
        "that also serves as a foreign key to the base table.\n"
        "If you have many subtypes or if you must support new attributes frequently,\n"
        "you can add a BLOB column to store data in a format such as XML or JSON,\n"
        "which encodes both the attribute names and their values.\n"
        "This design is best when you can't limit yourself to a finite set of subtypes\n"
        "and when you need complete flexibility to define new attributes at any time.\n"
    ),
)

METADATA_TRIBBLES = Rule(
    rule_id="metadata-tribbles",
    title="Metadata Tribbles",
    category=Category.LOGICAL,
    severity=Severity.ERROR,
    guard=ddl_only,
    # A-z is intentionally wide; it also admits [ \ ] ^ _ and backtick.
    # The lookbehind starts a match only at the beginning of a name run.
    pattern=re.compile(r"(?<![A-za-z\-_@])[A-za-z\-_@]+[0-9]+ "),
    message=(
        "● Store each value with the same meaning in a single column:\n"
        "Creating multiple columns in a table indicates that you are trying to store\n"
        "a multivalued attribute. This design makes it hard to add or remove values,\n"
        "to ensure the uniqueness of values, and handling growing sets of values.\n"
        "The best solution is to create a dependent table with one column for the\n"
        "multivalue attribute. Store the multiple values in multiple rows instead of\n"
        "multiple columns. Also, define a foreign key in the dependent table to associate\n"
        "the values to its parent row.\n"
        "\n"
        "● Breaking down a table or column by year:\n"
        "You might be trying to split a single column into multiple columns,\n"
        "using column names based on distinct values in another attribute.\n"
        "Each year, you will need to add one more column or table.\n"
        "You are mixing metadata with data. You will now need to make sure that\n"
        "the primary key values are unique across all the split columns or tables.\n"
        "The solution is to use a feature called sharding or horizontal partitioning.\n"
        "(PARTITION BY HASH ( YEAR(...) ). With this feature, you can gain the\n"
        "benefits of splitting a large table without the drawbacks.\n"
        "Partitioning is not defined in the SQL standard, so each brand of database\n"
        "implements it in their own nonstandard way.\n"
        "Another remedy for metadata tribbles is to create a dependent table.\n"
        "Instead of one row per entity with multiple columns for each year,\n"
        "use multiple rows. Don't let data spawn metadata.\n"
    ),
)


# Register all rules
_registry = RuleRegistry.get_instance()
_registry.register(MULTI_VALUED_ATTRIBUTE)
_registry.register(RECURSIVE_DEPENDENCY)
_registry.register(PRIMARY_KEY_EXISTS)
_registry.register(GENERIC_PRIMARY_KEY)
_registry.register(FOREIGN_KEY_EXISTS)
_registry.register(VARIABLE_ATTRIBUTE)
_registry.register(METADATA_TRIBBLES)
