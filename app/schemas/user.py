# app/schemas/user.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


# -----------------------------
# Request payloads
# -----------------------------

class FullnamePayload(BaseModel):
    firstname: str = Field(..., min_length=3, examples=["John"])
    lastname: Optional[str] = Field(default=None, min_length=3, examples=["Doe"])

    @field_validator("firstname", "lastname")
    @classmethod
    def strip_names(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("must be at least 3 characters long")
        return v


class RegisterPayload(BaseModel):
    fullname: FullnamePayload
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=6, examples=["secret123"])


class LoginPayload(BaseModel):
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=6, examples=["secret123"])


# -----------------------------
# Responses
# -----------------------------

class FullnameResponse(BaseModel):
    firstname: str
    lastname: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fullname: FullnameResponse
    email: EmailStr
    socket_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def from_record(cls, data):
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "fullname": {"firstname": data.firstname, "lastname": data.lastname},
            "email": data.email,
            "socket_id": data.socket_id,
        }


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
