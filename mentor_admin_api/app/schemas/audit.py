"""
Pydantic models for audit records.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator


class AuditLogRead(BaseModel):
    """One recorded administrative action.

    ``details`` is stored as JSON text and returned decoded; text that
    is not valid JSON is returned unchanged.
    """

    id: int
    user_id: Optional[int] = None
    action: str
    object_type: Optional[str] = None
    object_id: Optional[int] = None
    timestamp: Optional[datetime] = None
    details: Any = None

    @field_validator("details", mode="before")
    @classmethod
    def _decode_details(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value
