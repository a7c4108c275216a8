from .company_service import CompanyService

__all__ = ["CompanyService"]
