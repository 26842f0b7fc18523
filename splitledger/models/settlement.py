"""
Settlement records: direct payments between two members.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .expense import Money
from .member import MemberId, RecordId


class Settlement(BaseModel):
    """Records that ``from_member`` transferred ``amount`` to ``to_member``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: RecordId = Field(..., description="Settlement id")
    from_member: MemberId = Field(..., alias="from", description="Member who paid")
    to_member: MemberId = Field(..., alias="to", description="Member who received")
    amount: Money = Field(..., gt=0, description="Amount transferred")
    created_at: Optional[datetime] = Field(None, description="When the settlement was recorded")
    note: Optional[str] = Field(None, description="Optional note")

    @model_validator(mode="after")
    def validate_distinct_members(self):
        if self.from_member == self.to_member:
            raise ValueError("A member cannot settle with themselves")
        return self
