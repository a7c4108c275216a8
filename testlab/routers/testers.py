from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import require_dashboard
from ..models.forms import TesterForm
from ..views import DashboardShell, DashboardView, TesterListView

router = APIRouter(prefix="/api/testers", tags=["testers"])


async def _testers_view(shell: DashboardShell = Depends(require_dashboard)) -> TesterListView:
    return await shell.show(DashboardView.TESTERS)


@router.get("")
async def list_testers(view: TesterListView = Depends(_testers_view)) -> Dict[str, Any]:
    return view.snapshot()


@router.post("")
async def create_tester(form: TesterForm, view: TesterListView = Depends(_testers_view)) -> Dict[str, Any]:
    await view.create_tester(form.name, form.email, form.phone)
    return view.snapshot()
