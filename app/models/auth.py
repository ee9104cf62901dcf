"""
Authentication models for the gateway API.

Contains Pydantic models for authentication-related requests and responses.
"""
from pydantic import BaseModel
from typing import Optional, List


class LoginRequest(BaseModel):
    """Username/password login request"""
    username: str
    password: str


class Token(BaseModel):
    """JWT Token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenData(BaseModel):
    """Claims decoded from a gateway JWT"""
    user_id: str
    user_name: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None


class AuthStatus(BaseModel):
    """Identity of the current request"""
    authenticated: bool
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
    scopes: List[str] = []
