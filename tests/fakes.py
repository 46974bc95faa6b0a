import base64
import json
from typing import Any, Dict, List, Optional

import requests

from student_dashboard.backend.config import Settings
from student_dashboard.backend.services.gateway import RemoteGateway

ALLOWED = "student@example.com"
API_URL = "https://script.example.com/macros/s/abc/exec"


def make_settings(**overrides) -> Settings:
    values = dict(
        api_url=API_URL,
        api_key="secret-key",
        allowed_emails=(ALLOWED,),
        google_client_id="",
        verify_id_token=False,
        session_secret="test-session-secret",
    )
    values.update(overrides)
    return Settings(**values)


def make_token(claims: Dict[str, Any]) -> str:
    def seg(obj):
        raw = json.dumps(obj).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{seg({'alg': 'RS256', 'typ': 'JWT'})}.{seg(claims)}.signature"


def assignment(uid, days=None, **fields) -> Dict[str, Any]:
    record = {
        "uid": uid,
        "title": f"Assignment {uid}",
        "category": "Math",
        "type": "Homework",
        "status": "Not Started",
        "priority": "Medium",
        "daysUntilDue": days,
        "dueDate": "",
        "description": "",
    }
    record.update(fields)
    return record


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, bad_json: bool = False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; answers by the `action` query parameter."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        params = list(params or [])
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        action = dict(params).get("action")
        answer = self.routes.get(action, {"success": False, "error": f"Unknown action: {action}"})
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, (FakeResponse, requests.Response)):
            return answer
        return FakeResponse(answer)

    def actions(self) -> List[str]:
        return [dict(c["params"]).get("action") for c in self.calls]

    def close(self):
        self.closed = True


def ok(data=None) -> Dict[str, Any]:
    return {"success": True, "data": data}


def fail(error=None) -> Dict[str, Any]:
    body = {"success": False}
    if error is not None:
        body["error"] = error
    return body


def make_gateway(routes=None, notices=None) -> RemoteGateway:
    notify = notices.append if notices is not None else None
    return RemoteGateway(API_URL, "secret-key", notify=notify, session=FakeSession(routes))


def real_response(status_code: int, body: bytes, url: str) -> requests.Response:
    """A genuine requests.Response, so status and error text come from requests itself."""
    r = requests.Response()
    r.status_code = status_code
    r.reason = "Unauthorized" if status_code == 401 else "Error"
    r.url = url
    r.headers["Content-Type"] = "application/json"
    r._content = body
    return r
