from typing import Any, Dict, List, Optional, Tuple

from .base import CancellationToken, ViewModel
from ..core.messages import Messages
from ..models import Company, CompanyMember
from ..services.companies import CompanyService

CompaniesResult = Tuple[List[Company], Optional[str], List[CompanyMember], Optional[str]]


class CompaniesView(ViewModel):
    """
    Company membership manager.

    Lists the companies the user belongs to and the roster of the selected
    one. The first company is selected once the list arrives, unless a
    still-listed company was selected before.
    """

    name = "companies"
    fetch_error_key = "companies.fetch_failed"

    def __init__(self, messages: Messages, companies: CompanyService, user_id: str):
        super().__init__(messages)
        self.service = companies
        self.user_id = user_id
        self.companies: List[Company] = []
        self.members: List[CompanyMember] = []
        self.selected_company_id: Optional[str] = None

    async def fetch(self, token: CancellationToken) -> CompaniesResult:
        companies = await self.service.list_member_companies(self.user_id)
        if token.cancelled:
            return companies, None, [], None

        selected = self.selected_company_id
        if selected not in {company.id for company in companies}:
            selected = companies[0].id if companies else None

        members: List[CompanyMember] = []
        members_error = None
        if selected is not None:
            try:
                members = await self.service.list_members(selected)
            except Exception as e:
                # Company list is still usable without a roster
                members_error = self.messages.for_error(e, "members.fetch_failed")
        return companies, selected, members, members_error

    def apply(self, result: CompaniesResult) -> None:
        self.companies, self.selected_company_id, self.members, members_error = result
        if members_error:
            self.error = members_error

    @property
    def selected_company(self) -> Optional[Company]:
        for company in self.companies:
            if company.id == self.selected_company_id:
                return company
        return None

    async def select_company(self, company_id: str) -> None:
        self.selected_company_id = company_id
        self.members = []
        await self.load()

    async def create_company(self, name: str) -> bool:
        """Create a company with the current user as its admin."""
        return await self._mutate(
            lambda: self.service.create_company(name, self.user_id),
            "companies.create_failed",
        )

    async def add_member(self, email: str) -> bool:
        if self.selected_company_id is None:
            self.error = self.messages.get("members.add_failed")
            return False
        company_id = self.selected_company_id
        return await self._mutate(
            lambda: self.service.add_member(company_id, email),
            "members.add_failed",
        )

    async def remove_member(self, member_id: str) -> bool:
        return await self._mutate(
            lambda: self.service.remove_member(member_id),
            "members.remove_failed",
        )

    def data(self) -> Dict[str, Any]:
        return {
            "companies": [company.model_dump(mode="json") for company in self.companies],
            "selected_company_id": self.selected_company_id,
            "members": [member.model_dump(mode="json") for member in self.members],
        }
