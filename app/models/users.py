"""
User models for the gateway API.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from core.constants import Roles


class UserCreateRequest(BaseModel):
    """User creation request"""
    username: str = Field(min_length=3, max_length=150)
    password: str = Field(min_length=8)
    full_name: str = ""
    role: str = Roles.USER


class UserProfile(BaseModel):
    """User as returned by the API (never includes the password hash)"""
    id: str
    username: str
    full_name: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
