import logging
from dataclasses import dataclass

from student_dashboard.backend.database.store import AssignmentStore
from student_dashboard.backend.models import COMPLETED, NOT_STARTED
from student_dashboard.backend.services.gateway import GatewayError, RemoteGateway

logger = logging.getLogger(__name__)

LOADING = "Loading your assignments..."
SYNCING = "Syncing with calendar..."


@dataclass(frozen=True)
class StatusChange:
    uid: str
    ok: bool
    checked: bool  # what the checkbox should show once this settles


class StatusUpdater:
    def __init__(self, store: AssignmentStore, gateway: RemoteGateway):
        self.store = store
        self.gateway = gateway

    def load(self) -> bool:
        """Fetch assignments and categories and replace the store. Old data survives a failure."""
        self.store.begin_loading(LOADING)
        try:
            assignments = self.gateway.get_assignments()
            categories = self.gateway.get_categories()
        except GatewayError as e:
            self.store.fail_load(e.message)
            return False
        except Exception:
            self.store.end_loading()
            raise
        self.store.replace(assignments, categories)
        logger.info(f"Loaded {len(assignments)} assignments in {len(categories)} categories")
        return True

    def set_status(self, uid: str, completed: bool) -> StatusChange:
        """
        Push a checkbox toggle to the remote API.

        The browser has already flipped the checkbox. On failure nothing local
        changes and `checked` is the pre-toggle value to restore.
        """
        new_status = COMPLETED if completed else NOT_STARTED
        try:
            self.gateway.update_status(uid, new_status)
        except GatewayError:
            return StatusChange(uid=uid, ok=False, checked=not completed)

        if not self.store.patch_status(uid, new_status):
            logger.debug(f"Status updated remotely for unknown uid {uid}")
        self.store.feedback.push("✅ Marked as complete!" if completed else "📌 Marked as incomplete")
        return StatusChange(uid=uid, ok=True, checked=completed)

    def sync(self) -> bool:
        self.store.begin_loading(SYNCING)
        try:
            self.gateway.sync()
        except GatewayError:
            self.store.end_loading()
            self.store.feedback.push("❌ Sync failed")
            return False
        except Exception:
            self.store.end_loading()
            raise
        self.store.feedback.push("✅ Sync complete!")
        return self.load()
