"""Authentication and user DTOs"""
from pydantic import BaseModel, EmailStr
from typing import Optional


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    token: str
    refresh_token: str
    role: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class UserOut(BaseModel):
    email: str
    role: str

    class Config:
        from_attributes = True


class UserAdminOut(UserOut):
    id: int
