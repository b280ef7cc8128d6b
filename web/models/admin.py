"""Admin authentication models."""

from pydantic import BaseModel, EmailStr, Field


class AdminLoginRequest(BaseModel):
    """Admin login request model."""

    email: EmailStr
    password: str = Field(min_length=1)


class VerifyOTPRequest(BaseModel):
    """OTP verification request model."""

    email: EmailStr
    otp: str = Field(min_length=4)


class TokenResponse(BaseModel):
    """Session token response model."""

    token: str


class MessageResponse(BaseModel):
    """Short acknowledgement."""

    msg: str
