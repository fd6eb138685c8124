"""
Pydantic models for user profiles and authentication payloads.

A profile is created once at sign-up.  Its ``role`` decides which
dashboard the client renders and never changes afterwards.  Passwords
are accepted on input only and are never part of a response.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    admin = "admin"
    student = "student"


class UserCreate(BaseModel):
    """Schema for signing up.

    Fields are optional at the schema level; ``UserService`` reports
    the missing ones with a 400 response.
    """

    name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.edu"])
    password: Optional[str] = Field(None, examples=["strongpassword"])
    role: Optional[str] = Field(None, examples=["student"])


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    """Schema for reading a user profile."""

    user_id: str = Field(..., alias="userId")
    name: str
    email: str
    role: Role

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
    }


class TokenResponse(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    token_type: str = Field("bearer", alias="tokenType")
    user: UserProfile

    model_config = {
        "populate_by_name": True,
    }
