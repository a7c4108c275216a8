from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator


class MemberRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class Company(BaseModel):
    id: str
    name: str
    created_at: Optional[str] = None


class CompanyRef(BaseModel):
    id: str
    name: str


class CompanyMember(BaseModel):
    """A membership row joined with the member's profile e-mail."""

    id: str
    user_id: str
    role: MemberRole
    email: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_profile(cls, data: Any) -> Any:
        if isinstance(data, dict) and "profiles" in data:
            data = dict(data)
            profile = data.pop("profiles") or {}
            data.setdefault("email", profile.get("email"))
        return data


class Product(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    company_id: Optional[str] = None
    company: Optional[CompanyRef] = None


class ProductRef(BaseModel):
    id: str
    name: str


class ProductTest(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    is_private: bool = False
    created_at: Optional[str] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_product(cls, data: Any) -> Any:
        if isinstance(data, dict) and "product" in data:
            data = dict(data)
            product = data.pop("product") or {}
            data.setdefault("product_name", product.get("name"))
        return data


class Tester(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    created_at: Optional[str] = None


class TesterRef(BaseModel):
    name: str
    email: str


class ProductTestResult(BaseModel):
    """Created outside this application; read-only here."""

    id: str
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None
    created_at: Optional[str] = None
    tester: Optional[TesterRef] = None


class ProductTestShare(BaseModel):
    test_id: str
    shared_with_user_id: str


class RatingStatistics(BaseModel):
    average_rating: float = 0
    total_responses: int = 0
    # star value (5..1) -> whole percent of responses
    distribution: Dict[int, int] = Field(default_factory=dict)


class DashboardStats(BaseModel):
    companies: int = 0
    products: int = 0
    active_tests: int = 0
