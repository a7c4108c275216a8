from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import require_dashboard
from ..core.errors import ValidationError
from ..models.forms import ViewSelection
from ..views import DashboardShell, DashboardView, ViewModel

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(shell: DashboardShell = Depends(require_dashboard)) -> Dict[str, Any]:
    """Summary counts and the view currently on screen."""
    return shell.snapshot()


@router.post("/view")
async def switch_view(
    selection: ViewSelection,
    shell: DashboardShell = Depends(require_dashboard),
) -> Dict[str, Any]:
    try:
        view = DashboardView(selection.view)
    except ValueError:
        raise ValidationError(f"Unknown view '{selection.view}'", field="view")
    await shell.navigate(view)
    return shell.snapshot()


def _form_view(shell: DashboardShell) -> ViewModel:
    if shell.view is None:
        raise ValidationError(f"View '{shell.active_view.value}' has no form", field="view")
    return shell.view


@router.post("/form")
async def open_form(shell: DashboardShell = Depends(require_dashboard)) -> Dict[str, Any]:
    """Show the creation form of the view on screen."""
    _form_view(shell).open_form()
    return shell.snapshot()


@router.delete("/form")
async def close_form(shell: DashboardShell = Depends(require_dashboard)) -> Dict[str, Any]:
    _form_view(shell).close_form()
    return shell.snapshot()
