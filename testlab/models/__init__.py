from .entities import (
    Company,
    CompanyMember,
    CompanyRef,
    DashboardStats,
    MemberRole,
    Product,
    ProductRef,
    ProductTest,
    ProductTestResult,
    ProductTestShare,
    RatingStatistics,
    Tester,
    TesterRef,
)

__all__ = [
    "Company",
    "CompanyMember",
    "CompanyRef",
    "DashboardStats",
    "MemberRole",
    "Product",
    "ProductRef",
    "ProductTest",
    "ProductTestResult",
    "ProductTestShare",
    "RatingStatistics",
    "Tester",
    "TesterRef",
]
