from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class UserResolveRequest(BaseModel):
    """Display name to resolve into a user identity."""

    # Blank names are rejected by the identity service with a field error
    name: str = Field(
        max_length=100,
        description="Display name; an existing user with this exact name is reused"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Abebe"
            }
        }


# ============================================================
# Response Schemas (What API returns)
# ============================================================

class UserResponse(BaseModel):
    """Public user identity."""
    id: UUID
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
