"""
Creation forms submitted from the browser.

Required fields are enforced here the way the page's ``required`` inputs
enforce them; everything else (uniqueness, visibility, membership) is the
backend's business.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CredentialsForm(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CallbackRequest(BaseModel):
    fragment: str = ""


class CompanyForm(BaseModel):
    name: str = Field(..., min_length=1)


class MemberInviteForm(BaseModel):
    email: str = Field(..., min_length=1)


class ProductForm(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: Any) -> Any:
        return _blank_to_none(value)


class CompanySelection(BaseModel):
    company_id: str = Field(..., min_length=1)


class ProductTestForm(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_private: bool = False
    product_id: str = Field(..., min_length=1)

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: Any) -> Any:
        return _blank_to_none(value)


class TesterForm(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_phone(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ShareForm(BaseModel):
    email: str = Field(..., min_length=1)


class ViewSelection(BaseModel):
    view: str
