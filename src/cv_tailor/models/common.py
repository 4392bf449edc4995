"""Field types shared by the fragment schemas."""

from __future__ import annotations

from typing import Annotated
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, EmailStr, Field


def _check_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


NonEmptyStr = Annotated[str, Field(min_length=1)]
Url = Annotated[str, AfterValidator(_check_url)]


class ContactDetails(BaseModel):
    name: NonEmptyStr | None = None
    phone: NonEmptyStr
    email: EmailStr
    address: NonEmptyStr
    linkedin: Url
    github: Url
