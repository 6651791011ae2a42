"""
User-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel


class User(BaseModel):
    id: int
    name: str
    email: str


class UserCreateRequest(BaseModel):
    # Presence and format are checked by services.validation so that
    # missing fields produce the API's own error messages
    name: Optional[str] = None
    email: Optional[str] = None


class UserUpdateRequest(BaseModel):
    """Full replacement of a user's name and email"""
    name: Optional[str] = None
    email: Optional[str] = None
