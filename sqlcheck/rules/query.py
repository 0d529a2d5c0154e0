"""Query anti-patterns."""

from __future__ import annotations

import re

from .base import (
    Category,
    Rule,
    Severity,
    count_at_least,
    create_table_only,
    length_at_least,
)
from .registry import RuleRegistry

SELECT_STAR = Rule(
    rule_id="select-star",
    title="SELECT *",
    category=Category.QUERY,
    severity=Severity.ERROR,
    pattern=re.compile(r"(select\s+\*)"),
    message=(
        "● Inefficiency in moving data to the consumer:\n"
        "When you SELECT *, you're often retrieving more columns from the database than\n"
        "your application really needs to function. This causes more data to move from\n"
        "the database server to the client, slowing access and increasing load on your\n"
        "machines, as well as taking more time to travel across the network. This is\n"
        "especially true when someone adds new columns to underlying tables that didn't\n"
        "exist and weren't needed when the original consumers coded their data access.\n"
        "\n"
        "● Indexing issues:\n"
        "Consider a scenario where you want to tune a query to a high level of performance.\n"
        "If you were to use *, and it returned more columns than you actually needed,\n"
        "the server would often have to perform more expensive methods to retrieve your\n"
        "data than it otherwise might. For example, you wouldn't be able to create an index\n"
        "which simply covered the columns in your SELECT list, and even if you did\n"
        "(including all columns), the next developer who came around and added a column\n"
        "to the underlying table would cause the optimizer to ignore your optimized covering\n"
        "index, and you'd likely find that the performance of your query would drop\n"
        "substantially for no readily apparent reason.\n"
        "\n"
        "● Binding Problems:\n"
        "When you SELECT *, it's possible to retrieve two columns of the same name from two\n"
        "different tables. This can often crash your data consumer. Imagine a query that joins\n"
        "two tables, both of which contain a column called \"ID\". How would a consumer know\n"
        "which was which? SELECT * can also confuse views (at least in some versions SQL Server)\n"
        "when underlying table structures change: the view is not rebuilt, and the data which\n"
        "comes back can be nonsense. And the worst part of it is that you can take care to name\n"
        "your columns whatever you want, but the next developer who comes along might have no\n"
        "way of knowing that they have to worry about adding a column which will collide with\n"
        "your already-developed names.\n"
    ),
)

NULL_USAGE = Rule(
    rule_id="null-usage",
    title="NULL Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(null)"),
    message=(
        "● Use NULL as a Unique Value:\n"
        "NULL is not the same as zero. A number ten greater than an unknown is still an unknown.\n"
        "NULL is not the same as a string of zero length.\n"
        "Combining any string with NULL in standard SQL returns NULL.\n"
        "NULL is not the same as false. Boolean expressions with AND, OR, and NOT also produce\n"
        "results that some people find confusing.\n"
        "When you declare a column as NOT NULL, it should be because it would make no sense\n"
        "for the row to exist without a value in that column.\n"
        "Use null to signify a missing value for any data type.\n"
    ),
)

NOT_NULL_USAGE = Rule(
    rule_id="not-null-usage",
    title="NOT NULL Usage",
    category=Category.QUERY,
    severity=Severity.WARN,
    guard=create_table_only,
    pattern=re.compile(r"(not null)"),
    message=(
        "● Use NOT NULL only if the column cannot have a missing value:\n"
        "When you declare a column as NOT NULL, it should be because it would make no sense\n"
        "for the row to exist without a value in that column.\n"
        "Use null to signify a missing value for any data type.\n"
    ),
)

STRING_CONCATENATION = Rule(
    rule_id="string-concatenation",
    title="String Concatenation",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"\|\|"),
    message=(
        "● Use COALESCE for string concatenation of nullable columns:\n"
        "You may need to force a column or expression to be non-null for the sake of\n"
        "simplifying the query logic, but you don't want that value to be stored.\n"
        "Use COALESCE function to construct the concatenated expression so that a\n"
        "null-valued column doesn't make the whole expression become null.\n"
        "EX: SELECT first_name || COALESCE(' ' || middle_initial || ' ', ' ') || last_name\n"
        "AS full_name FROM Accounts;\n"
    ),
)

GROUP_BY_USAGE = Rule(
    rule_id="group-by-usage",
    title="GROUP BY Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(group by)"),
    message=(
        "● Do not reference non-grouped columns:\n"
        "Every column in the select-list of a query must have a single value row\n"
        "per row group. This is called the Single-Value Rule.\n"
        "Columns named in the GROUP BY clause are guaranteed to be exactly one value\n"
        "per group, no matter how many rows the group matches.\n"
        "Most DBMSs report an error if you try to run any query that tries to return\n"
        "a column other than those columns named in the GROUP BY clause or as\n"
        "arguments to aggregate functions.\n"
        "Every expression in the select list must be contained in either an\n"
        "aggregate function or the GROUP BY clause.\n"
        "Follow the single-value rule to avoid ambiguous query results.\n"
    ),
)

ORDER_BY_RAND = Rule(
    rule_id="order-by-rand",
    title="ORDER BY RAND Usage",
    category=Category.QUERY,
    severity=Severity.WARN,
    pattern=re.compile(r"(order by rand\()"),
    message=(
        "● Sorting by a nondeterministic expression (RAND()) means the sorting cannot benefit\n"
        "from an index:\n"
        "There is no index containing the values returned by the random function.\n"
        "That's the point of them being random: they are different and unpredictable each\n"
        "time they're selected. This is a problem for the performance of the query, because\n"
        "using an index is one of the best ways of speeding up sorting. The consequence of\n"
        "not using an index is that the query result set has to be sorted by the database\n"
        "using a slow table scan.\n"
        "One technique that avoids sorting the table is to choose a random value\n"
        "between 1 and the greatest primary key value.\n"
        "Still another technique that avoids problems found in the preceding alternatives\n"
        "is to count the rows in the data set and return a random number between 0 and\n"
        "the count. Then use this number as an offset.\n"
        "Some queries just cannot be optimized; consider using different approaches.\n"
    ),
)

PATTERN_MATCHING = Rule(
    rule_id="pattern-matching",
    title="Pattern Matching Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(like)|(regexp)|(similar to)"),
    message=(
        "● Avoid using vanilla pattern matching:\n"
        "The most important disadvantage of pattern-matching operators is that\n"
        "they have poor performance. A second problem of simple pattern-matching using LIKE\n"
        "or regular expressions is that it can find unintended matches.\n"
        "It's best to use a specialized search engine technology like Apache Lucene,\n"
        "instead of SQL. Another alternative is to reduce the recurring cost of search by\n"
        "saving the result. Consider using vendor extensions like FULLTEXT INDEX in MySQL.\n"
        "More broadly, you don't have to use SQL to solve every problem.\n"
    ),
)

SPAGHETTI_QUERY = Rule(
    rule_id="spaghetti-query",
    title="Spaghetti Query Alert",
    category=Category.QUERY,
    severity=Severity.INFO,
    policy=length_at_least(500, setting="spaghetti_length_threshold"),
    message=(
        "● Split up a complex spaghetti query into several simpler queries:\n"
        "SQL is a very expressive language: you can accomplish a lot in a single query\n"
        "or statement. But that doesn't mean it's mandatory or even a good idea to\n"
        "approach every task with the assumption it has to be done in one line of code.\n"
        "One common unintended consequence of producing all your results in one query is\n"
        "a Cartesian product. This happens when two of the tables in the query have no\n"
        "condition restricting their relationship. Without such a restriction, the join\n"
        "of two tables pairs each row in the first table to every row in the other table.\n"
        "Each such pairing becomes a row of the result set, and you end up with many\n"
        "more rows than you expect.\n"
        "It's important to consider that these queries are simply hard to write, hard to\n"
        "modify, and hard to debug. You should expect to get regular requests for\n"
        "incremental enhancements to your database applications. Managers want more\n"
        "complex reports and more fields in a user interface. If you design intricate,\n"
        "monolithic SQL queries, it's more costly and time-consuming to make enhancements\n"
        "to them. Your time is worth something, both to you and to your project.\n"
        "Split up a complex spaghetti query into several simpler queries.\n"
        "When you split up a query, the result may be that you have many similar queries.\n"
        "Perhaps your queries differ in filtering conditions or in the choice of which\n"
        "columns to return. Consider using SQL code generation to build the queries.\n"
    ),
)

REDUCE_JOINS = Rule(
    rule_id="reduce-joins",
    title="Reduce Number of JOINs",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(join)"),
    policy=count_at_least(5, setting="join_count_threshold"),
    message=(
        "● Reduce Number of JOINs:\n"
        "Too many JOINs is a symptom of complex spaghetti queries. Consider splitting\n"
        "up the complex query into many simpler queries, and reduce the number of JOINs.\n"
    ),
)

ELIMINATE_DISTINCT = Rule(
    rule_id="eliminate-distinct",
    title="Eliminate Unnecessary DISTINCT Conditions",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(distinct)"),
    policy=count_at_least(5, setting="distinct_count_threshold"),
    message=(
        "● Eliminate Unnecessary DISTINCT Conditions:\n"
        "Too many DISTINCT conditions is a symptom of complex spaghetti queries.\n"
        "Consider splitting up the complex query into many simpler queries, and reduce\n"
        "the number of DISTINCT conditions.\n"
        "It is possible that the DISTINCT condition has no effect if a primary key\n"
        "column is part of the result set of columns.\n"
    ),
)

IMPLICIT_COLUMNS = Rule(
    rule_id="implicit-columns",
    title="Implicit Column Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"insert\s+into\s+[^\s(]+\s+values"),
    message=(
        "● Explicitly name columns:\n"
        "Although using wildcards and unnamed columns satisfies the goal of less typing,\n"
        "this habit creates several hazards. This can break application refactoring and\n"
        "can harm performance. Always spell out all the columns you need, instead of\n"
        "relying on wild-cards or implicit column lists.\n"
    ),
)

HAVING_CLAUSE = Rule(
    rule_id="having-clause",
    title="HAVING Clause Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(having)"),
    message=(
        "● Consider removing the HAVING clause:\n"
        "Rewriting the query's HAVING clause into a predicate will enable the use of\n"
        "indexes during query processing.\n"
        "EX: SELECT s.cust_id,count(s.cust_id) FROM SH.sales s GROUP BY s.cust_id\n"
        "HAVING s.cust_id != '1660' AND s.cust_id != '2';\n"
        "can be rewritten as:\n"
        "SELECT s.cust_id,count(cust_id) FROM SH.sales s WHERE s.cust_id != '1660'\n"
        "AND s.cust_id !='2' GROUP BY s.cust_id;\n"
    ),
)

NESTED_SUBQUERIES = Rule(
    rule_id="nested-subqueries",
    title="Nested sub queries",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(select)"),
    policy=count_at_least(2, setting="nesting_threshold"),
    message=(
        "● Un-nest sub queries:\n"
        "Rewriting nested queries as joins often leads to more efficient execution and\n"
        "more effective optimization. In general, sub-query unnesting is always done for\n"
        "correlated sub-queries with, at most, one table in the FROM clause, which are\n"
        "used in ANY, ALL, and EXISTS predicates. An uncorrelated sub-query, or a\n"
        "sub-query with more than one table in the FROM clause, is flattened if it can be\n"
        "decided, based on the query semantics, that the sub-query returns at most one row.\n"
        "EX: SELECT * FROM SH.products p WHERE p.prod_id = (SELECT s.prod_id FROM SH.sales s\n"
        "WHERE s.cust_id = 100996 AND s.quantity_sold = 1);\n"
        "can be rewritten as:\n"
        "SELECT p.* FROM SH.products p, sales s WHERE p.prod_id = s.prod_id AND\n"
        "s.cust_id = 100996 AND s.quantity_sold = 1;\n"
    ),
)

OR_USAGE = Rule(
    rule_id="or-usage",
    title="OR Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(\sor\s)"),
    message=(
        "● Consider using an IN predicate when querying an indexed column:\n"
        "The IN-list predicate can be exploited for indexed retrieval and also, the\n"
        "optimizer can sort the IN-list to match the sort sequence of the index, leading\n"
        "to more efficient retrieval. Note that the IN-list must contain only constants,\n"
        "or values that are constant during one execution of the query block, such as\n"
        "outer references.\n"
        "EX: SELECT s.* FROM SH.sales s WHERE s.prod_id = 14 OR s.prod_id = 17;\n"
        "can be rewritten as:\n"
        "SELECT s.* FROM SH.sales s WHERE s.prod_id IN (14, 17);\n"
    ),
)

UNION_USAGE = Rule(
    rule_id="union-usage",
    title="UNION Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    pattern=re.compile(r"(union)"),
    message=(
        "● Consider using UNION ALL if you do not care about duplicates:\n"
        "Unlike UNION which removes duplicates, UNION ALL allows duplicate tuples.\n"
        "If you do not care about duplicate tuples, then using UNION ALL would be a\n"
        "faster option.\n"
    ),
)

DISTINCT_JOIN = Rule(
    rule_id="distinct-join",
    title="DISTINCT & JOIN Usage",
    category=Category.QUERY,
    severity=Severity.INFO,
    # Each match spans from the last distinct before a join to that join.
    pattern=re.compile(r"(distinct(?:(?!distinct|join).)*join)"),
    message=(
        "● Consider using a sub-query with EXISTS instead of DISTINCT:\n"
        "The DISTINCT keyword removes duplicates after sorting the tuples.\n"
        "Instead, consider using a sub query with the EXISTS keyword, you can avoid\n"
        "having to return an entire table.\n"
        "EX: SELECT DISTINCT c.country_id, c.country_name FROM SH.countries c,\n"
        "SH.customers e WHERE e.country_id = c.country_id;\n"
        "can be rewritten to:\n"
        "SELECT c.country_id, c.country_name FROM SH.countries c WHERE EXISTS\n"
        "(SELECT 'X' FROM SH.customers e WHERE e.country_id = c.country_id);\n"
    ),
)


# Register all rules
_registry = RuleRegistry.get_instance()
_registry.register(SELECT_STAR)
_registry.register(NULL_USAGE)
_registry.register(NOT_NULL_USAGE)
_registry.register(STRING_CONCATENATION)
_registry.register(GROUP_BY_USAGE)
_registry.register(ORDER_BY_RAND)
_registry.register(PATTERN_MATCHING)
_registry.register(SPAGHETTI_QUERY)
_registry.register(REDUCE_JOINS)
_registry.register(ELIMINATE_DISTINCT)
_registry.register(IMPLICIT_COLUMNS)
_registry.register(HAVING_CLAUSE)
_registry.register(NESTED_SUBQUERIES)
_registry.register(OR_USAGE)
_registry.register(UNION_USAGE)
_registry.register(DISTINCT_JOIN)
