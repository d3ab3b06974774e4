import re
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$")
# 대문자, 소문자, 숫자, 특수문자 각 1개 이상
STRONG_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt 입력 한계


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _check_name(value: str) -> str:
    value = value.strip()
    if not 2 <= len(value) <= 50:
        raise ValueError("Name must be between 2-50 characters")
    if not NAME_PATTERN.match(value):
        raise ValueError("Name can only contain letters and spaces")
    return value


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not PHONE_PATTERN.match(value):
        raise ValueError("Please provide a valid phone number")
    return value


def _check_password_length(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_LENGTH} bytes")
    return value


class ProfileFields(CamelModel):
    age: Optional[int] = Field(default=None, ge=13, le=120)
    fitness_level: Optional[FitnessLevel] = None
    goal: Optional[str] = Field(default=None, max_length=200)

    @field_validator("goal")
    @classmethod
    def strip_goal(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class UserCreate(ProfileFields):
    name: str
    email: EmailStr
    password: str
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_length(value)


class UserUpdate(ProfileFields):
    """프로필 부분 수정 (보내지 않은 필드는 유지)"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return _check_name(value) if value is not None else None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_email(value) if value is not None else None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class EmailRequest(CamelModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class OTPVerifyRequest(EmailRequest):
    otp: str = Field(min_length=1, max_length=12)

    @field_validator("otp")
    @classmethod
    def strip_otp(cls, value: str) -> str:
        return value.strip()


class PasswordResetRequest(CamelModel):
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        value = _check_password_length(value)
        if not STRONG_PASSWORD_PATTERN.match(value):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, "
                "one number, and one special character"
            )
        return value


class User(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    age: Optional[int] = None
    fitness_level: Optional[FitnessLevel] = None
    goal: Optional[str] = None
    is_verified: bool
    last_login: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(CamelModel):
    message: str


class RegisterResponse(MessageResponse):
    requires_verification: bool
    email: str


class UserResponse(MessageResponse):
    user: User
