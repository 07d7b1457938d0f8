"""
Query Builder - ordered SQL predicates with named bound parameters.

Each predicate is a SQL fragment with ``{}`` slots. Values are bound as
``:p1``, ``:p2``... in the order they are appended, so fragments and values
stay aligned whatever subset of filters is active. User input never ends up
inside the SQL text.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``%`` and ``_`` match themselves."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class QueryBuilder:
    """
    Comprehensive where clause builder for PostgreSQL queries.
    """

    def __init__(self, param_prefix: str = "p"):
        self.param_prefix = param_prefix
        self.conditions: List[str] = []
        self.values: List[Any] = []
        self.joins: List[str] = []

    def bind(self, value: Any) -> str:
        """Append a value and return the placeholder that references it."""
        self.values.append(value)
        return f":{self.param_prefix}{len(self.values)}"

    def add(self, fragment: str, *values: Any) -> 'QueryBuilder':
        """
        Add a condition, binding ``values`` into its ``{}`` slots in order.

        Args:
            fragment: SQL with one ``{}`` per value
            values: Values to bind

        Returns:
            Self for method chaining
        """
        placeholders = [self.bind(v) for v in values]
        self.conditions.append(fragment.format(*placeholders))
        return self

    def like(self, field: str, value: Optional[str]) -> 'QueryBuilder':
        """Add ILIKE substring condition (case-insensitive, value matched literally)."""
        if not value:
            return self
        return self.add(f"{field} ILIKE {{}} ESCAPE '\\'", f"%{escape_like(value)}%")

    def in_list(self, field: str, values: Optional[Sequence[Any]]) -> 'QueryBuilder':
        """Add membership condition against a bound array."""
        if not values:
            return self
        return self.add(f"{field} = ANY({{}})", list(values))

    def any_of(self, alternatives: Sequence[Tuple[str, Sequence[Any]]]) -> 'QueryBuilder':
        """
        Add a parenthesized OR group.

        Args:
            alternatives: ``(fragment, values)`` pairs, bound left to right
        """
        if not alternatives:
            return self
        rendered = []
        for fragment, values in alternatives:
            placeholders = [self.bind(v) for v in values]
            rendered.append(fragment.format(*placeholders))
        self.conditions.append(f"({' OR '.join(rendered)})")
        return self

    def custom_condition(self, condition: str) -> 'QueryBuilder':
        """Add a condition with no bound values."""
        self.conditions.append(condition)
        return self

    def require_join(self, join_clause: str) -> 'QueryBuilder':
        if join_clause not in self.joins:
            self.joins.append(join_clause)
        return self

    def build(self) -> str:
        """
        Build the final WHERE clause.

        Returns:
            Complete WHERE clause string (empty string if no conditions)
        """
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)

    def build_joins(self) -> str:
        return "\n".join(self.joins)

    def params(self) -> Dict[str, Any]:
        return {f"{self.param_prefix}{i}": v for i, v in enumerate(self.values, start=1)}

    @classmethod
    def create(cls) -> 'QueryBuilder':
        """Factory method to create new builder instance"""
        return cls()
