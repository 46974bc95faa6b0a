import threading
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from student_dashboard.backend.models import Assignment, FilterCriteria
from student_dashboard.backend.services.feedback import FeedbackQueue
from student_dashboard.backend.services.filters import apply_quick_filter, filter_all


class AssignmentStore:
    """
    In-memory state for one signed-in user.

    `assignments` is the source of truth and is only ever replaced wholesale
    (after a load) or patched one status at a time. `filtered` is a derived view
    that holds references to the same records, so a status patch shows up in it
    without re-filtering.
    """

    def __init__(self, feedback: Optional[FeedbackQueue] = None):
        self.feedback = feedback or FeedbackQueue()
        self._lock = threading.Lock()
        self._assignments: List[Assignment] = []
        self._filtered: List[Assignment] = []
        self._categories: List[str] = []
        self.criteria = FilterCriteria()
        self.quick: Optional[str] = None
        self.loading_message: Optional[str] = None
        self.load_error: Optional[str] = None
        self.loaded_at: Optional[datetime] = None

    # ------------- READ -------------
    @property
    def assignments(self) -> List[Assignment]:
        return list(self._assignments)

    @property
    def filtered(self) -> List[Assignment]:
        return list(self._filtered)

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def find(self, uid: str) -> Optional[Assignment]:
        return next((a for a in self._assignments if a.uid == uid), None)

    # ------------- WRITE -------------
    def replace(self, assignments: Sequence[Assignment], categories: Sequence[str]) -> None:
        with self._lock:
            self._assignments = list(assignments)
            self._filtered = list(self._assignments)
            self._categories = list(categories)
            self.criteria = FilterCriteria()
            self.quick = None
            self.load_error = None
            self.loading_message = None
            self.loaded_at = datetime.now(timezone.utc)

    def patch_status(self, uid: str, status: str) -> bool:
        """Set one record's status in place. Unknown uids are ignored."""
        with self._lock:
            record = self.find(uid)
            if record is None:
                return False
            record.status = status
            return True

    def apply_filters(self, criteria: FilterCriteria) -> List[Assignment]:
        with self._lock:
            self.criteria = criteria
            self.quick = None
            self.load_error = None
            self._filtered = filter_all(self._assignments, criteria)
            return list(self._filtered)

    def apply_quick_filter(self, name: str) -> List[Assignment]:
        with self._lock:
            self._filtered = apply_quick_filter(self._assignments, name)
            self.quick = name
            self.load_error = None
            return list(self._filtered)

    def begin_loading(self, message: str) -> None:
        self.loading_message = message

    def end_loading(self) -> None:
        self.loading_message = None

    def fail_load(self, message: str) -> None:
        with self._lock:
            self.loading_message = None
            self.load_error = message
