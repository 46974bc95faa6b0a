import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from student_dashboard.backend.config import Settings
from student_dashboard.backend.database.store import AssignmentStore
from student_dashboard.backend.services.feedback import FeedbackQueue
from student_dashboard.backend.services.gateway import RemoteGateway
from student_dashboard.backend.services.status_updater import StatusUpdater

# (settings, notify) -> gateway
GatewayFactory = Callable[[Settings, Callable[[str], None]], RemoteGateway]


def default_gateway_factory(settings: Settings, notify: Callable[[str], None]) -> RemoteGateway:
    return RemoteGateway(settings.api_url, settings.api_key, notify=notify, timeout=settings.api_timeout)


@dataclass
class Workspace:
    email: str
    store: AssignmentStore
    gateway: RemoteGateway
    updater: StatusUpdater

    @property
    def needs_load(self) -> bool:
        return self.store.loaded_at is None and self.store.loading_message is None


class WorkspaceRegistry:
    """One workspace per signed-in email, alive until sign-out."""

    def __init__(self, settings: Settings, gateway_factory: GatewayFactory = default_gateway_factory):
        self.settings = settings
        self.gateway_factory = gateway_factory
        self._lock = threading.Lock()
        self._workspaces: Dict[str, Workspace] = {}

    def get(self, email: str) -> Optional[Workspace]:
        return self._workspaces.get(email)

    def open(self, email: str) -> Workspace:
        with self._lock:
            ws = self._workspaces.get(email)
            if ws is None:
                store = AssignmentStore(FeedbackQueue(self.settings.feedback_ttl_seconds))
                gateway = self.gateway_factory(self.settings, store.feedback.push)
                ws = Workspace(email=email, store=store, gateway=gateway, updater=StatusUpdater(store, gateway))
                self._workspaces[email] = ws
            return ws

    def close(self, email: str) -> None:
        with self._lock:
            ws = self._workspaces.pop(email, None)
        if ws is not None:
            ws.gateway.session.close()
