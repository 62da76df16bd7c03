"""Authentication-related Pydantic schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Admin login submission. Empty values are rejected by the service."""

    username: str | None = Field(None, description="Administrator username")
    password: str | None = Field(None, description="Administrator password")


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    message: str = Field("Login successful.", description="Human-readable status")
    credential: str = Field(..., description="Opaque credential, also set as a cookie")
    expires_in: int = Field(..., description="Credential lifetime in seconds")


class AuthStatusResponse(BaseModel):
    """Whether the caller currently holds a valid admin credential."""

    authenticated: bool
    username: str | None = None


class MessageResponse(BaseModel):
    message: str
