import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from student_dashboard.backend.routers.deps import api_workspace
from student_dashboard.backend.services.renderer import render_store
from student_dashboard.backend.services.workspace import Workspace

logger = logging.getLogger(__name__)

#REQUEST MODELS
class StatusRequest(BaseModel):
    completed: bool


router = APIRouter(
    prefix="/api",
    tags=["assignments"],
)


@router.get("/assignments")
def get_assignments(workspace: Workspace = Depends(api_workspace)):
    """Current view as JSON: sorted cards, progress, criteria and live notices."""
    try:
        if workspace.needs_load:
            workspace.updater.load()
        view = render_store(workspace.store, drain_feedback=False)
        return {
            "success": view.placeholder_kind != "error",
            "payload": view.to_dict(),
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Failed to build assignment view")
        raise HTTPException(status_code=500, detail=f"Failed to build assignment view: {str(e)}")


@router.post("/assignments/{uid:path}/status")
def set_status(uid: str, request: StatusRequest, workspace: Workspace = Depends(api_workspace)):
    change = workspace.updater.set_status(uid, request.completed)
    return {
        "success": change.ok,
        "uid": change.uid,
        "checked": change.checked,
    }


@router.post("/sync")
def sync(workspace: Workspace = Depends(api_workspace)):
    ok = workspace.updater.sync()
    return {
        "success": ok,
        "payload": render_store(workspace.store, drain_feedback=False).to_dict(),
    }
