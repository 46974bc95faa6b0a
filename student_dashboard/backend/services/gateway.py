import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from student_dashboard.backend.models import Assignment, Envelope, parse_assignments, unique_categories

logger = logging.getLogger(__name__)

GENERIC_ERROR = "API request failed"
NOT_CONFIGURED = "Assignments API is not configured"


def _status_message(r: requests.Response) -> Optional[str]:
    if r.ok:
        return None
    return f"{GENERIC_ERROR} (HTTP {r.status_code})"


class GatewayError(Exception):
    """A remote API call failed; the message is safe to show the user."""

    def __init__(self, message: str = GENERIC_ERROR, action: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.action = action


class RemoteGateway:
    """
    The only door to the remote assignments API.

    Every call is a single GET of `<base_url>?key=...&action=...&<params>` answered
    with a `{success, data, error}` envelope. Failures are reported through
    `notify` (a transient message) and then raised as GatewayError.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        notify: Optional[Callable[[str], None]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.notify = notify
        self.timeout = timeout
        self.session = session or requests.Session()

    def _query(self, action: str, params: Dict[str, Any]) -> List[tuple]:
        query = [("key", self.api_key), ("action", action)]
        query.extend((k, "" if v is None else str(v)) for k, v in params.items())
        return query

    def _fail(self, action: str, message: str) -> GatewayError:
        # message must never carry the request URL: it holds the API key
        logger.warning(f"Remote API error on {action}: {message}")
        if self.notify:
            self.notify(f"❌ Error: {message}")
        return GatewayError(message, action=action)

    def call(self, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.base_url:
            raise self._fail(action, NOT_CONFIGURED)

        try:
            r = self.session.get(self.base_url, params=self._query(action, params or {}), timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Remote API request for {action} raised {type(e).__name__}")
            raise self._fail(action, GENERIC_ERROR) from e

        # the envelope is read before the status code so a server-supplied error wins
        try:
            envelope = Envelope.model_validate(r.json())
        except ValueError as e:  # bad JSON or a pydantic ValidationError
            raise self._fail(action, _status_message(r) or "Malformed API response") from e

        if not envelope.success:
            raise self._fail(action, envelope.error or GENERIC_ERROR)
        if not r.ok:
            raise self._fail(action, _status_message(r))
        return envelope.data

    # ---------- ACTIONS ----------
    def get_assignments(self) -> List[Assignment]:
        data = self.call("getAssignments")
        if not isinstance(data, list):
            raise self._fail("getAssignments", "Malformed assignments payload")
        return parse_assignments(data)

    def get_categories(self) -> List[str]:
        data = self.call("getCategories")
        if not isinstance(data, list):
            raise self._fail("getCategories", "Malformed categories payload")
        return unique_categories(data)

    def update_status(self, uid: str, status: str) -> None:
        self.call("updateStatus", {"uid": uid, "status": status})

    def sync(self) -> None:
        self.call("sync")
