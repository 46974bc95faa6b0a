"""
Pure view-model side of the dashboard: sorting, labels, and progress.

Nothing here touches HTML; `student_dashboard.frontend.markup` paints the
DashboardView this module produces.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from student_dashboard.backend.models import Assignment, FilterCriteria

NO_DUE_SENTINEL = 9999
NO_ASSIGNMENTS = "No assignments found!"
LOAD_FAILED = "Failed to load assignments. Please refresh the page."

TYPE_CLASSES = {
    "Test/Quiz": "test-quiz",
    "Project": "project",
    "Homework": "homework",
    "Reading": "reading",
    "Classwork": "classwork",
    "Participation": "participation",
}
DEFAULT_TYPE_CLASS = "assignment"


@dataclass
class CardView:
    uid: str
    title: str
    category: str
    priority: str
    type_label: str
    type_class: str
    completed: bool
    due_label: str
    urgency: str
    description: Optional[str] = None


@dataclass
class ProgressView:
    percent: int
    label: str


@dataclass
class DashboardView:
    cards: List[CardView]
    progress: ProgressView
    placeholder: Optional[str] = None
    placeholder_kind: Optional[str] = None  # "empty" | "loading" | "error"
    categories: List[str] = field(default_factory=list)
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    quick: Optional[str] = None
    feedback: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["criteria"] = self.criteria.model_dump()
        return data


def _sort_key(a: Assignment) -> int:
    return a.days_until_due if a.days_until_due is not None else NO_DUE_SENTINEL


def sort_by_urgency(assignments: Sequence[Assignment]) -> List[Assignment]:
    return sorted(assignments, key=_sort_key)


def type_class(type_: Optional[str]) -> str:
    return TYPE_CLASSES.get(type_ or "", DEFAULT_TYPE_CLASS)


def due_label(a: Assignment) -> str:
    d = a.days_until_due
    if d is None:
        return a.due_date or "No due date"
    if d < 0:
        return f"Overdue by {abs(d)} days"
    if d == 0:
        return "Due Today"
    if d == 1:
        return "Due Tomorrow"
    # 2-3 days and later share a label; `urgency` carries the difference
    return f"Due in {d} days"


def urgency(a: Assignment) -> str:
    d = a.days_until_due
    if d is None:
        return "undated"
    if d < 0:
        return "overdue"
    if d == 0:
        return "today"
    if d <= 3:
        return "soon"
    return "upcoming"


def progress(assignments: Sequence[Assignment]) -> ProgressView:
    total = len(assignments)
    done = sum(1 for a in assignments if a.is_completed)
    # half rounds up, like the browser's Math.round
    percent = math.floor(done / total * 100 + 0.5) if total else 0
    return ProgressView(percent=percent, label=f"{percent}% Complete")


def card(a: Assignment) -> CardView:
    return CardView(
        uid=a.uid,
        title=a.title,
        category=a.category,
        priority=a.priority,
        type_label=a.type or "Assignment",
        type_class=type_class(a.type),
        completed=a.is_completed,
        due_label=due_label(a),
        urgency=urgency(a),
        description=a.description or None,
    )


def render(
    filtered: Sequence[Assignment],
    assignments: Sequence[Assignment],
    *,
    categories: Sequence[str] = (),
    criteria: Optional[FilterCriteria] = None,
    quick: Optional[str] = None,
    feedback: Sequence[str] = (),
    loading_message: Optional[str] = None,
    load_error: Optional[str] = None,
) -> DashboardView:
    """
    Build the dashboard view.

    Progress always comes from the full `assignments` collection, never from
    `filtered`, so the bar shows overall completion whatever the current view.
    """
    view = DashboardView(
        cards=[],
        progress=progress(assignments),
        categories=list(categories),
        criteria=criteria or FilterCriteria(),
        quick=quick,
        feedback=list(feedback),
    )
    if loading_message:
        view.placeholder, view.placeholder_kind = loading_message, "loading"
    elif load_error:
        view.placeholder, view.placeholder_kind = LOAD_FAILED, "error"
    elif not filtered:
        view.placeholder, view.placeholder_kind = NO_ASSIGNMENTS, "empty"
    else:
        view.cards = [card(a) for a in sort_by_urgency(filtered)]
    return view


def render_store(store, drain_feedback: bool = True) -> DashboardView:
    """Render an AssignmentStore. Pages drain the notices; JSON readers only peek."""
    return render(
        store.filtered,
        store.assignments,
        categories=store.categories,
        criteria=store.criteria,
        quick=store.quick,
        feedback=store.feedback.drain() if drain_feedback else store.feedback.active(),
        loading_message=store.loading_message,
        load_error=store.load_error,
    )
