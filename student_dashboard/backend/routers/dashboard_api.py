from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import RedirectResponse

from student_dashboard.backend.models import WILDCARD, FilterCriteria
from student_dashboard.backend.routers.deps import page_workspace
from student_dashboard.backend.services.workspace import Workspace

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@router.post("/filters")
def apply_filters(
    category: str = Form(WILDCARD),
    type_: str = Form(WILDCARD, alias="type"),
    status: str = Form(WILDCARD),
    workspace: Workspace = Depends(page_workspace),
):
    workspace.store.apply_filters(FilterCriteria(category=category, type=type_, status=status))
    return _back_home()


@router.post("/quick/{name}")
def quick_filter(name: str, workspace: Workspace = Depends(page_workspace)):
    try:
        workspace.store.apply_quick_filter(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _back_home()


@router.post("/assignments/{uid:path}/status")
def toggle_status(
    uid: str,
    completed: Optional[str] = Form(None),
    workspace: Workspace = Depends(page_workspace),
):
    """
    Checkbox form target. An unchecked box sends no `completed` field.
    A failed update leaves the store untouched, so the re-rendered page shows
    the checkbox back in its pre-toggle state.
    """
    workspace.updater.set_status(uid, completed is not None and completed != "false")
    return _back_home()


@router.post("/sync")
def sync(workspace: Workspace = Depends(page_workspace)):
    workspace.updater.sync()
    return _back_home()


@router.post("/reload")
def reload(workspace: Workspace = Depends(page_workspace)):
    workspace.updater.load()
    return _back_home()
