from pydantic import BaseModel, EmailStr
from uuid import UUID
from typing import Optional
from datetime import datetime

from app.models.user import UserRole


class UserSummary(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    """
    Used by ADMIN to create a user record in backend DB.
    Leave password empty for accounts that sign in through Supabase.
    """
    email: EmailStr
    first_name: str
    last_name: str = ""
    role: UserRole = UserRole.EMPLOYEE
    password: Optional[str] = None


class UserResponse(UserSummary):
    role: UserRole
    is_active: bool

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
