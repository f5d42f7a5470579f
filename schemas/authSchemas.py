from typing import Optional

from pydantic import Field

from schemas.validation import RequestModel


class LoginRequest(RequestModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)


class RegisterCustomerRequest(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)
    whatsapp: Optional[str] = Field(default=None, max_length=20)
