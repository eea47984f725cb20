"""Authentication schemas."""

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    user_id: int


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str


class LogoutResponse(BaseModel):
    message: str = "Logout successful. Token invalidation not needed on the server side."
