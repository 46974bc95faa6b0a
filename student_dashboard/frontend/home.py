import re
from typing import Optional

from student_dashboard.backend.config import Settings
from student_dashboard.backend.services.renderer import DashboardView
from student_dashboard.frontend.markup import (
    esc,
    assignment_list,
    feedback_messages,
    filter_controls,
    progress_bar,
)

CSS = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif; margin: 0; background: #f4f6fb; color: #222; }
header { display: flex; justify-content: space-between; align-items: center; padding: 16px 24px; background: #4a5fc1; color: #fff; }
header form { display: inline; }
main { max-width: 900px; margin: 0 auto; padding: 16px; }
#login-container { max-width: 420px; margin: 15vh auto; text-align: center; background: #fff; padding: 32px; border-radius: 12px; }
.alert { background: #fde2e2; color: #8a1c1c; padding: 12px; border-radius: 8px; margin-bottom: 16px; }
.filters { display: flex; flex-wrap: wrap; gap: 8px; margin-bottom: 12px; }
.quick-filter.active { background: #4a5fc1; color: #fff; }
.progress { background: #dde2f0; border-radius: 8px; overflow: hidden; margin-bottom: 16px; }
.progress-bar { background: #3bb273; color: #fff; padding: 4px 8px; white-space: nowrap; min-width: 6em; }
.assignment-card { background: #fff; border-left: 6px solid #888; border-radius: 8px; padding: 12px 16px; margin-bottom: 10px; }
.assignment-card.completed { opacity: .55; }
.assignment-card.completed .assignment-title { text-decoration: line-through; }
.assignment-header { display: flex; align-items: center; gap: 10px; }
.assignment-title { flex: 1; font-weight: 600; }
.assignment-details { display: flex; gap: 16px; font-size: .9em; color: #555; margin-top: 6px; }
.assignment-description { margin-top: 8px; font-size: .9em; white-space: pre-wrap; }
.type-badge { font-size: .75em; padding: 2px 8px; border-radius: 10px; background: #eee; }
.test-quiz { border-color: #e24c4c; } .project { border-color: #8e5bd6; } .homework { border-color: #3b82f6; }
.reading { border-color: #14a38b; } .classwork { border-color: #f0a020; } .participation { border-color: #d94fa0; }
.due-overdue { color: #c62828; font-weight: 600; } .due-today { color: #c62828; } .due-soon { color: #b7791f; }
.no-assignments, .loading, .error { text-align: center; padding: 40px; color: #666; }
.error { color: #8a1c1c; }
.feedback-message { position: fixed; right: 20px; bottom: 20px; background: #333; color: #fff; padding: 10px 16px;
  border-radius: 8px; animation: fade-out __FEEDBACK_TTL__s forwards; }
@keyframes fade-out { 0%, 80% { opacity: 1; } 100% { opacity: 0; visibility: hidden; } }
"""

PAGE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>__TITLE__</title>
    <style>__CSS__</style>
  </head>
  <body>
__BODY__
  </body>
</html>
"""

LOGIN_BODY = """
    <div id="login-container">
      <h1>📚 __TITLE__</h1>
      __ALERT__
      <p>Sign in with your school Google account.</p>
      <script src="https://accounts.google.com/gsi/client" async defer></script>
      __SIGNED_OUT__
      <div id="g_id_onload"
           data-client_id="__CLIENT_ID__"
           data-login_uri="/auth/credential"
           data-auto_select="__AUTO_SELECT__">
      </div>
      <div class="g_id_signin" data-type="standard"></div>
    </div>
"""

# Tell the identity widget to forget the auto-select choice after sign-out.
SIGNED_OUT_SCRIPT = """<script>
        window.addEventListener("load", function () {
          if (window.google && google.accounts) { google.accounts.id.disableAutoSelect(); }
        });
      </script>"""

APP_BODY = """
    <div id="app">
      <header>
        <h1>📚 __TITLE__</h1>
        <div>
          <span class="user">__EMAIL__</span>
          <form method="post" action="/dashboard/sync"
                onsubmit="document.getElementById('assignmentsList').innerHTML='<div class=&quot;loading&quot;>Syncing with calendar...</div>'">
            <button type="submit" id="syncButton">🔄 Sync</button>
          </form>
          <form method="post" action="/auth/signout"><button type="submit">Sign out</button></form>
        </div>
      </header>
      <main>
        __PROGRESS__
        __FILTERS__
        <div id="assignmentsList">__LIST__</div>
      </main>
      __FEEDBACK__
    </div>
"""


_SLOT = re.compile(r"__([A-Z_]+?)__")


def _fill(template: str, **values: str) -> str:
    # single pass, so text coming out of one slot is never scanned for another
    return _SLOT.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def _page(title: str, body: str, settings: Settings) -> str:
    css = _fill(CSS, FEEDBACK_TTL=f"{settings.feedback_ttl_seconds:g}")
    return _fill(PAGE, CSS=css, TITLE=esc(title), BODY=body)


def render_login_page(settings: Settings, message: Optional[str] = None, signed_out: bool = False) -> str:
    alert = f'<div class="alert" role="alert">{esc(message)}</div>' if message else ""
    body = _fill(
        LOGIN_BODY,
        ALERT=alert,
        SIGNED_OUT=SIGNED_OUT_SCRIPT if signed_out else "",
        CLIENT_ID=esc(settings.google_client_id),
        AUTO_SELECT="false" if signed_out else "true",
        TITLE=esc(settings.app_name),
    )
    return _page(settings.app_name, body, settings)


def render_app_page(settings: Settings, view: DashboardView, email: str) -> str:
    body = _fill(
        APP_BODY,
        TITLE=esc(settings.app_name),
        EMAIL=esc(email),
        PROGRESS=progress_bar(view.progress),
        FILTERS=filter_controls(view),
        LIST=assignment_list(view),
        FEEDBACK=feedback_messages(view.feedback),
    )
    return _page(settings.app_name, body, settings)
