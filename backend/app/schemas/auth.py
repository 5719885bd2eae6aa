"""
Current user schema.

Session state is owned by the authentication layer; this core only reads the
current user's identity and role.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional

from backend.app.models.references import extract_identifier


class CurrentUser(BaseModel):
    """
    Schema for the signed-in user.

    `role` is kept as a raw string: unknown roles must still route somewhere.
    """
    id: Optional[str] = Field(default=None, description="User ID")
    name: Optional[str] = Field(default=None, description="Display name")
    role: Optional[str] = Field(default=None, description="Admin, Finance or Agent")
    branch: Optional[str] = Field(default=None, description="Branch the user works in")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Optional[str]:
        return extract_identifier(value)
