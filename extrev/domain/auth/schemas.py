"""Auth domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_password, validate_username


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return validate_password(v)


class LoginRequest(BaseModel):
    username: str
    password: str
