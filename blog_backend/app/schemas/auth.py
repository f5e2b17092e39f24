from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=3, max_length=40)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class UserPublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    email: str
    createdAt: str


class LoginRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def _needs_identifier(self) -> "LoginRequest":
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
