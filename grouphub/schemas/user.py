"""User Schemas — registration and login payloads.

Invariants:
    - login_handle is stripped the same way on register and login, so a padded
      handle stored as "bob" is found again when logging in as " bob "
    - password is at most 72 bytes UTF-8 encoded: bcrypt rejects longer input
    - LoginResponse never carries a password hash
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

BCRYPT_MAX_BYTES = 72


def _strip_non_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes")
    return v


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    login_handle: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=BCRYPT_MAX_BYTES)

    @field_validator("name", "login_handle")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_non_empty(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class RegisterResponse(BaseModel):
    id: UUID


class LoginRequest(BaseModel):
    login_handle: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=BCRYPT_MAX_BYTES)

    @field_validator("login_handle")
    @classmethod
    def strip_handle(cls, v: str) -> str:
        return _strip_non_empty(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginResponse(BaseModel):
    id: UUID
    name: str
    login_handle: str
