"""SQL query value object.

Indicator queries run against production databases, so only a single,
comment-free, read-only SELECT statement is accepted.
"""

import re
from dataclasses import dataclass

MAX_QUERY_LENGTH = 4000
HIGH_COMPLEXITY_THRESHOLD = 10

DANGEROUS_KEYWORDS = (
    "DROP",
    "DELETE",
    "INSERT",
    "UPDATE",
    "ALTER",
    "CREATE",
    "TRUNCATE",
    "EXEC",
    "EXECUTE",
)

_SELECT_PREFIX = re.compile(r"^SELECT\b", re.IGNORECASE)
_DANGEROUS_PATTERN = re.compile(
    r"\b(?:" + "|".join(DANGEROUS_KEYWORDS) + r")\b|\b(?:xp|sp)_\w+",
    re.IGNORECASE,
)
_COMMENT_MARKERS = ("--", "/*", "*/")
_TABLE_REFERENCE = re.compile(
    r"\b(?:FROM|JOIN)\s+((?:[\[\"`]?\w+[\]\"`]?\.){0,2}[\[\"`]?\w+[\]\"`]?)",
    re.IGNORECASE,
)
_JOIN = re.compile(r"\bJOIN\b", re.IGNORECASE)
_SUBQUERY = re.compile(r"\(\s*SELECT\b", re.IGNORECASE)
_CLAUSES = (
    re.compile(r"\bWHERE\b", re.IGNORECASE),
    re.compile(r"\bGROUP\s+BY\b", re.IGNORECASE),
    re.compile(r"\bORDER\s+BY\b", re.IGNORECASE),
    re.compile(r"\bHAVING\b", re.IGNORECASE),
)


@dataclass(frozen=True)
class SqlQuery:
    """Validated read-only SQL query.

    Validation order (the first failing check determines the message):
    SELECT prefix, dangerous keywords, length, comment markers, statement count.

    Attributes:
        value: Query text with surrounding whitespace removed
    """

    value: str

    def __post_init__(self):
        """Validate the query text."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("SQL query cannot be empty")

        query = self.value.strip()

        if not _SELECT_PREFIX.match(query):
            raise ValueError("Only SELECT queries are allowed")

        dangerous = _DANGEROUS_PATTERN.search(query)
        if dangerous:
            raise ValueError(
                f"Query contains a forbidden keyword: {dangerous.group(0).upper()}"
            )

        if len(query) > MAX_QUERY_LENGTH:
            raise ValueError(
                f"Query exceeds maximum length of {MAX_QUERY_LENGTH} characters"
            )

        if any(marker in query for marker in _COMMENT_MARKERS):
            raise ValueError("SQL comments are not allowed in queries")

        semicolons = query.count(";")
        if semicolons > 1 or (semicolons == 1 and not query.endswith(";")):
            raise ValueError("Multiple SQL statements are not allowed")

        object.__setattr__(self, "value", query)

    @property
    def table_references(self) -> list[str]:
        """Distinct FROM/JOIN targets in order of first appearance."""
        seen: dict[str, str] = {}
        for match in _TABLE_REFERENCE.finditer(self.value):
            name = re.sub(r"[\[\]\"`]", "", match.group(1))
            seen.setdefault(name.lower(), name)
        return list(seen.values())

    @property
    def join_count(self) -> int:
        return len(_JOIN.findall(self.value))

    @property
    def subquery_count(self) -> int:
        return len(_SUBQUERY.findall(self.value))

    @property
    def complexity_score(self) -> int:
        """1 + 2 per JOIN + 1 per subquery + 1 per WHERE/GROUP BY/ORDER BY/HAVING."""
        clause_count = sum(len(pattern.findall(self.value)) for pattern in _CLAUSES)
        return 1 + 2 * self.join_count + self.subquery_count + clause_count

    @property
    def is_high_complexity(self) -> bool:
        return self.complexity_score > HIGH_COMPLEXITY_THRESHOLD

    def __str__(self) -> str:
        return self.value
