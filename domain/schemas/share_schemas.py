from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import datetime
from uuid import UUID

from domain.enums import ShareStatus
from domain.schemas.auth_schemas import UserSummary
from domain.schemas.user_recipe_schemas import UserRecipeSummary


class ShareRecipeRequest(BaseModel):
    """Share one of your recipes with another account, by email"""

    recipe_id: UUID
    user_email: EmailStr
    message: Optional[str] = Field(None, max_length=500)

    @field_validator("user_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ShareStatusUpdate(BaseModel):
    status: Literal["accepted", "rejected"]


class SharedRecipeResponse(BaseModel):
    share_id: UUID
    recipe_id: UUID
    owner_id: UUID
    shared_with_user_id: UUID
    message: Optional[str] = None
    status: ShareStatus
    shared_at: datetime
    recipe: Optional[UserRecipeSummary] = None
    owner: Optional[UserSummary] = None
    recipient: Optional[UserSummary] = None

    model_config = {"from_attributes": True}


class ShareCreatedResponse(BaseModel):
    message: str
    share: SharedRecipeResponse
