from typing import List, Optional
import logging

from ..profiles import find_profile_id
from ...backend import BackendClient
from ...core.errors import (
    AlreadyMemberError,
    ApplicationError,
    ErrorCode,
    UniqueViolationError,
)
from ...models import Company, CompanyMember, MemberRole

logger = logging.getLogger(__name__)


class CompanyService:
    """Companies and memberships, always scoped through the caller's own membership rows."""

    def __init__(self, backend: BackendClient, create_rpc_name: str = "create_company_with_admin"):
        self.backend = backend
        self.create_rpc_name = create_rpc_name

    async def list_member_company_ids(self, user_id: str) -> List[str]:
        response = await self.backend.table("company_members") \
            .select("company_id") \
            .eq("user_id", user_id) \
            .execute()
        return [row["company_id"] for row in response.data or []]

    async def list_member_companies(self, user_id: str) -> List[Company]:
        """
        Companies the user belongs to, ordered by name.

        Two requests: the user's memberships first, then the companies by
        that id set. The company table is never scanned directly.
        """
        company_ids = await self.list_member_company_ids(user_id)
        if not company_ids:
            return []

        response = await self.backend.table("companies") \
            .select("*") \
            .in_("id", company_ids) \
            .order("name") \
            .execute()
        return [Company.model_validate(row) for row in response.data or []]

    async def create_company(self, name: str, admin_id: str) -> Company:
        """Create a company and its admin membership in one remote procedure call."""
        response = await self.backend.rpc(
            self.create_rpc_name,
            {"company_name": name, "admin_id": admin_id},
        )
        if not response.data:
            raise ApplicationError("No company created", ErrorCode.EXTERNAL_SERVICE_ERROR, 502)

        data = response.data[0] if isinstance(response.data, list) else response.data
        if not isinstance(data, dict):
            # Procedures returning only the new id
            data = {"id": str(data), "name": name}
        logger.info(f"Company '{name}' created with admin {admin_id}")
        return Company.model_validate(data)

    async def list_members(self, company_id: str) -> List[CompanyMember]:
        response = await self.backend.table("company_members") \
            .select("id, user_id, role, profiles!inner(email)") \
            .eq("company_id", company_id) \
            .execute()
        return [CompanyMember.model_validate(row) for row in response.data or []]

    async def find_membership_id(self, company_id: str, user_id: str) -> Optional[str]:
        response = await self.backend.table("company_members") \
            .select("id") \
            .eq("company_id", company_id) \
            .eq("user_id", user_id) \
            .execute()
        rows = response.data or []
        return rows[0]["id"] if rows else None

    async def add_member(self, company_id: str, email: str, role: MemberRole = MemberRole.MEMBER) -> None:
        """
        Invite a registered user into a company.

        Raises:
            UserNotFoundError: no profile exists for ``email``; nothing is inserted.
            AlreadyMemberError: the user already belongs to the company; raised
                before any insert is attempted.
        """
        user_id = await find_profile_id(self.backend, email)

        if await self.find_membership_id(company_id, user_id):
            raise AlreadyMemberError(company_id, user_id)

        try:
            await self.backend.table("company_members").insert({
                "company_id": company_id,
                "user_id": user_id,
                "role": role.value,
            }).execute()
        except UniqueViolationError as e:
            # Another session added the same user between the check and the insert
            raise AlreadyMemberError(company_id, user_id) from e
        logger.info(f"User {user_id} added to company {company_id} as {role.value}")

    async def remove_member(self, member_id: str) -> None:
        await self.backend.table("company_members").delete().eq("id", member_id).execute()
        logger.info(f"Membership {member_id} removed")
