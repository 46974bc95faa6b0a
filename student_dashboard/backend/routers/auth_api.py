import logging
from typing import Optional

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from student_dashboard.backend.routers.deps import current_email, get_registry, get_settings
from student_dashboard.backend.services.renderer import render_store
from student_dashboard.backend.services.session_gate import authorize, seal_session, unseal_session
from student_dashboard.frontend.home import render_app_page, render_login_page

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["auth"],
)


@router.get("/", response_class=HTMLResponse)
def home(request: Request, signed_out: bool = False):
    """
    Login view, or the dashboard when the browser remembers an allowed email.
    The first visit of a workspace triggers the initial load.
    """
    settings = get_settings(request)
    email = current_email(request)

    if email is None:
        response = HTMLResponse(render_login_page(settings, signed_out=signed_out))
        if request.cookies.get(settings.session_cookie):
            # remembered email fell off the allow-list
            response.delete_cookie(settings.session_cookie)
        return response

    workspace = get_registry(request).open(email)
    if workspace.needs_load:
        workspace.updater.load()
    return HTMLResponse(render_app_page(settings, render_store(workspace.store), email))


@router.post("/auth/credential")
def receive_credential(
    request: Request,
    credential: str = Form(...),
    g_csrf_token: Optional[str] = Form(None),
):
    settings = get_settings(request)

    cookie_token = request.cookies.get("g_csrf_token")
    if (cookie_token or g_csrf_token) and cookie_token != g_csrf_token:
        raise HTTPException(status_code=400, detail="Failed to verify double submit cookie.")

    result = authorize(credential, settings)
    if not result.authorized:
        return HTMLResponse(render_login_page(settings, message=result.reason), status_code=403)

    get_registry(request).open(result.email)
    response = RedirectResponse("/", status_code=303)
    response.set_cookie(
        settings.session_cookie,
        seal_session(result.email, settings),
        max_age=settings.cookie_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


@router.post("/auth/signout")
def sign_out(request: Request):
    settings = get_settings(request)
    email = unseal_session(request.cookies.get(settings.session_cookie), settings)
    if email:
        get_registry(request).close(email)
        logger.info(f"Signed out {email}")

    response = RedirectResponse("/?signed_out=1", status_code=303)
    response.delete_cookie(
        settings.session_cookie,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response
