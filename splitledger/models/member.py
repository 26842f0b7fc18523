"""
Member identity and directory profile.
The id normalizer is the only place raw storage ids are turned into MemberId.
"""

from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def normalize_identifier(value: Any) -> str:
    """
    Normalize a raw identifier coming from storage into its canonical string.

    Args:
        value: str, int or UUID identifier

    Returns:
        Stripped string form of the identifier

    Raises:
        ValueError: If the identifier is empty or of an unsupported type
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, UUID)):
        raise ValueError(f"Unsupported identifier type: {type(value).__name__}")

    normalized = str(value).strip()
    if not normalized:
        raise ValueError("Identifier cannot be empty")
    return normalized

MemberId = Annotated[str, BeforeValidator(normalize_identifier)]
RecordId = Annotated[str, BeforeValidator(normalize_identifier)]

class MemberProfile(BaseModel):
    """Display data for a member, supplied by the member directory."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId = Field(..., description="Canonical member id")
    name: str = Field(..., description="Display name")
    email: Optional[str] = Field(None, description="Contact email")
