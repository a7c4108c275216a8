from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import require_dashboard
from ..models.forms import CompanyForm, MemberInviteForm
from ..views import CompaniesView, DashboardShell, DashboardView

router = APIRouter(prefix="/api/companies", tags=["companies"])


async def _companies_view(shell: DashboardShell = Depends(require_dashboard)) -> CompaniesView:
    return await shell.show(DashboardView.COMPANIES)


@router.get("")
async def list_companies(view: CompaniesView = Depends(_companies_view)) -> Dict[str, Any]:
    return view.snapshot()


@router.post("")
async def create_company(form: CompanyForm, view: CompaniesView = Depends(_companies_view)) -> Dict[str, Any]:
    await view.create_company(form.name)
    return view.snapshot()


@router.post("/{company_id}/select")
async def select_company(company_id: str, view: CompaniesView = Depends(_companies_view)) -> Dict[str, Any]:
    await view.select_company(company_id)
    return view.snapshot()


@router.post("/{company_id}/members")
async def add_member(
    company_id: str,
    form: MemberInviteForm,
    view: CompaniesView = Depends(_companies_view),
) -> Dict[str, Any]:
    """Invite a registered user by e-mail into the company."""
    if view.selected_company_id != company_id:
        await view.select_company(company_id)
    await view.add_member(form.email)
    return view.snapshot()


@router.delete("/{company_id}/members/{member_id}")
async def remove_member(
    company_id: str,
    member_id: str,
    view: CompaniesView = Depends(_companies_view),
) -> Dict[str, Any]:
    if view.selected_company_id != company_id:
        await view.select_company(company_id)
    await view.remove_member(member_id)
    return view.snapshot()
