from typing import Callable, Dict, List, Sequence

from student_dashboard.backend.models import TEST_QUIZ, WILDCARD, Assignment, FilterCriteria


def _matches(value, wanted: str) -> bool:
    return wanted == WILDCARD or value == wanted


def filter_all(assignments: Sequence[Assignment], criteria: FilterCriteria) -> List[Assignment]:
    """Keep records matching every non-wildcard criterion, in input order."""
    return [
        a for a in assignments
        if _matches(a.category, criteria.category)
        and _matches(a.type, criteria.type)
        and _matches(a.status, criteria.status)
    ]


def filter_due_today(assignments: Sequence[Assignment]) -> List[Assignment]:
    return [a for a in assignments if a.days_until_due is not None and a.days_until_due == 0]


def filter_due_this_week(assignments: Sequence[Assignment]) -> List[Assignment]:
    return [a for a in assignments if a.days_until_due is not None and 0 <= a.days_until_due <= 7]


def filter_by_type(assignments: Sequence[Assignment], type_: str) -> List[Assignment]:
    return [a for a in assignments if a.type == type_]


QUICK_FILTERS: Dict[str, Callable[[Sequence[Assignment]], List[Assignment]]] = {
    "today": filter_due_today,
    "week": filter_due_this_week,
    "tests": lambda assignments: filter_by_type(assignments, TEST_QUIZ),
}


def apply_quick_filter(assignments: Sequence[Assignment], name: str) -> List[Assignment]:
    try:
        fn = QUICK_FILTERS[name]
    except KeyError:
        raise ValueError(f"Unknown quick filter: {name}") from None
    return fn(assignments)
