from typing import Optional

from fastapi import HTTPException, Request

from student_dashboard.backend.config import Settings
from student_dashboard.backend.services.session_gate import restore_session
from student_dashboard.backend.services.workspace import Workspace, WorkspaceRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


def current_email(request: Request) -> Optional[str]:
    """The remembered email from the durable cookie, if it is still allow-listed."""
    settings = get_settings(request)
    return restore_session(request.cookies.get(settings.session_cookie), settings)


def page_workspace(request: Request) -> Workspace:
    email = current_email(request)
    if email is None:
        raise HTTPException(status_code=303, headers={"Location": "/"})
    return get_registry(request).open(email)


def api_workspace(request: Request) -> Workspace:
    email = current_email(request)
    if email is None:
        raise HTTPException(status_code=401, detail="Sign in required.")
    return get_registry(request).open(email)
