"""Employee Query — pure search, lookup and ranking over a snapshot of records.

Invariants:
    - Pure functions: no IO, no async, no registry access
    - Name search folds case with str.casefold on both sides (locale-independent)
    - Empty search query matches every record; input order preserved in results
    - find_by_id returns the first exact match, None when absent, never raises
    - highest_salary of an empty snapshot is 0
    - top_earner_names is a stable descending sort: equal salaries keep input order

Design Decisions:
    - Functions take the record list as an argument: the service layer owns fetching,
      so every function here is testable with plain lists
    - sorted() over heapq.nlargest: stability is guaranteed by sorted(), and the
      snapshot is small enough that a full sort is fine
"""

from collections import Counter
from collections.abc import Sequence

from employee_api.schemas.employee import Employee

DEFAULT_TOP_EARNERS = 10


def search_by_name(records: Sequence[Employee], query: str) -> list[Employee]:
    """Records whose name contains query, case-insensitive."""
    needle = query.casefold()
    return [r for r in records if needle in r.name.casefold()]


def find_by_id(records: Sequence[Employee], employee_id: str) -> Employee | None:
    """First record whose id equals employee_id exactly."""
    return next((r for r in records if r.id == employee_id), None)


def highest_salary(records: Sequence[Employee]) -> int:
    return max((r.salary for r in records), default=0)


def top_earner_names(
    records: Sequence[Employee], n: int = DEFAULT_TOP_EARNERS,
) -> list[str]:
    """Names of the n best-paid records, highest salary first.

    Fewer than n records returns all of them. Raises ValueError for negative n.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    ranked = sorted(records, key=lambda r: r.salary, reverse=True)
    return [r.name for r in ranked[:n]]


def find_duplicate_ids(records: Sequence[Employee]) -> list[str]:
    """Identifiers that occur more than once, in first-seen order."""
    counts = Counter(r.id for r in records)
    return [employee_id for employee_id, c in counts.items() if c > 1]
