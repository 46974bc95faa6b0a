# Paints a DashboardView as HTML fragments. Every piece of user-supplied text
# goes through esc() before it touches markup.
from __future__ import annotations

from html import escape
from typing import Iterable, List, Optional
from urllib.parse import quote

from student_dashboard.backend.models import WILDCARD
from student_dashboard.backend.services.renderer import CardView, DashboardView, ProgressView

TYPE_OPTIONS = ["Test/Quiz", "Project", "Homework", "Reading", "Classwork", "Participation"]
STATUS_OPTIONS = ["Not Started", "In Progress", "Completed"]

URGENCY_MARKERS = {
    "overdue": "⚠️ ",
    "today": "🔴 ",
    "soon": "🟡 ",
}

QUICK_BUTTONS = [
    ("today", "📅 Due Today"),
    ("week", "📆 This Week"),
    ("tests", "📝 Tests Only"),
]


def esc(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def _options(all_label: str, values: Iterable[str], selected: str) -> str:
    out = [f'<option value="{WILDCARD}"{" selected" if selected == WILDCARD else ""}>{esc(all_label)}</option>']
    for v in values:
        sel = " selected" if v == selected else ""
        out.append(f'<option value="{esc(v)}"{sel}>{esc(v)}</option>')
    return "".join(out)


def filter_controls(view: DashboardView) -> str:
    c = view.criteria
    quick = "".join(
        f'<button type="submit" formaction="/dashboard/quick/{name}" '
        f'class="quick-filter{" active" if view.quick == name else ""}">{label}</button>'
        for name, label in QUICK_BUTTONS
    )
    return (
        '<form class="filters" method="post" action="/dashboard/filters">'
        f'<select name="category" id="subjectFilter" onchange="this.form.submit()">'
        f'{_options("All Subjects", view.categories, c.category)}</select>'
        f'<select name="type" id="typeFilter" onchange="this.form.submit()">'
        f'{_options("All Types", TYPE_OPTIONS, c.type)}</select>'
        f'<select name="status" id="statusFilter" onchange="this.form.submit()">'
        f'{_options("All Statuses", STATUS_OPTIONS, c.status)}</select>'
        '<noscript><button type="submit">Apply</button></noscript>'
        f'<div class="quick-filters">{quick}</div>'
        '</form>'
    )


def progress_bar(progress: ProgressView) -> str:
    return (
        '<div class="progress">'
        f'<div class="progress-bar" id="progressBar" style="width: {progress.percent}%">'
        f'{esc(progress.label)}</div></div>'
    )


def assignment_card(card: CardView) -> str:
    completed = " completed" if card.completed else ""
    checked = " checked" if card.completed else ""
    marker = URGENCY_MARKERS.get(card.urgency, "")
    description = (
        f'<div class="assignment-description">{esc(card.description)}</div>' if card.description else ""
    )
    return (
        f'<div class="assignment-card {card.type_class}{completed}" data-uid="{esc(card.uid)}">'
        '<div class="assignment-header">'
        f'<form method="post" action="/dashboard/assignments/{esc(quote(card.uid, safe=""))}/status">'
        f'<input type="checkbox" class="checkbox-complete" name="completed" value="true"{checked} '
        'onchange="this.form.submit()">'
        '</form>'
        f'<div class="assignment-title">{esc(card.title)}</div>'
        f'<span class="type-badge {card.type_class}">{esc(card.type_label)}</span>'
        '</div>'
        '<div class="assignment-details">'
        f'<span class="detail-item">📚 {esc(card.category)}</span>'
        f'<span class="detail-item due-{card.urgency}">📅 {marker}{esc(card.due_label)}</span>'
        f'<span class="detail-item">⚡ {esc(card.priority)}</span>'
        '</div>'
        f'{description}'
        '</div>'
    )


def assignment_list(view: DashboardView) -> str:
    if view.placeholder is not None:
        kind = {"loading": "loading", "error": "error"}.get(view.placeholder_kind or "", "no-assignments")
        retry = ""
        if view.placeholder_kind == "error":
            retry = (
                '<form method="post" action="/dashboard/reload">'
                '<button type="submit" class="retry">🔄 Refresh</button></form>'
            )
        return f'<div class="{kind}">{esc(view.placeholder)}{retry}</div>'
    return "".join(assignment_card(c) for c in view.cards)


def feedback_messages(messages: List[str]) -> str:
    return "".join(f'<div class="feedback-message">{esc(m)}</div>' for m in messages)
