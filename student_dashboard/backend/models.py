from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

COMPLETED = "Completed"
NOT_STARTED = "Not Started"
TEST_QUIZ = "Test/Quiz"
WILDCARD = "all"


class Assignment(BaseModel):
    """One assignment as the remote API sends it. Only `status` changes locally."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(min_length=1)
    title: str = ""
    description: Optional[str] = None
    category: str = ""
    type: Optional[str] = None
    status: str = ""
    priority: str = ""
    days_until_due: Optional[int] = Field(default=None, alias="daysUntilDue")
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    @field_validator("uid", mode="before")
    @classmethod
    def _uid_as_text(cls, value: Any) -> Any:
        # sheet-backed ids sometimes come through as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "category", "status", "priority", mode="before")
    @classmethod
    def _text_or_blank(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("description", "type", "due_date", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("days_until_due", mode="before")
    @classmethod
    def _integral_or_none(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


class Envelope(BaseModel):
    success: bool
    data: Any = None
    error: Optional[str] = None


class FilterCriteria(BaseModel):
    category: str = WILDCARD
    type: str = WILDCARD
    status: str = WILDCARD

    @field_validator("category", "type", "status", mode="before")
    @classmethod
    def _blank_is_wildcard(cls, value: Any) -> str:
        if value is None or value == "":
            return WILDCARD
        return str(value)


def parse_assignments(items: Iterable[Any]) -> List[Assignment]:
    """Validate raw records, dropping (and logging) the ones that can't be used."""
    out = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Dropping assignment #{i}: expected an object, got {type(item).__name__}")
            continue
        try:
            out.append(Assignment.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping assignment #{i} ({item.get('uid')!r}): {e.error_count()} invalid field(s)")
    return out


def unique_categories(items: Iterable[Any]) -> List[str]:
    return list(dict.fromkeys(c for c in items if isinstance(c, str) and c))
