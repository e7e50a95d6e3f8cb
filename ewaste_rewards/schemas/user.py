"""User schemas"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime

from ewaste_rewards.utils.validators import validate_email_address

class UserResolveRequest(BaseModel):
    """Identity handed over by the external auth provider"""
    email: str = Field(..., max_length=255)
    name: str = Field("Anonymous User", min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email_address(v)

class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
