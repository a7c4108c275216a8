from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import require_dashboard
from ..models.forms import ProductTestForm, ShareForm
from ..views import DashboardShell, DashboardView, ProductTestsView

router = APIRouter(prefix="/api/tests", tags=["tests"])


async def _tests_view(shell: DashboardShell = Depends(require_dashboard)) -> ProductTestsView:
    return await shell.show(DashboardView.TESTS)


@router.get("")
async def list_tests(view: ProductTestsView = Depends(_tests_view)) -> Dict[str, Any]:
    return view.snapshot()


@router.post("")
async def create_test(form: ProductTestForm, view: ProductTestsView = Depends(_tests_view)) -> Dict[str, Any]:
    view.select_product(form.product_id)
    await view.create_test(form.title, form.description, form.is_private, form.product_id)
    return view.snapshot()


@router.get("/{test_id}/results")
async def get_results(test_id: str, view: ProductTestsView = Depends(_tests_view)) -> Dict[str, Any]:
    """Results of one test with average rating and star distribution."""
    results = await view.open_results(test_id)
    return results.snapshot()


@router.post("/{test_id}/shares")
async def share_test(
    test_id: str,
    form: ShareForm,
    view: ProductTestsView = Depends(_tests_view),
) -> Dict[str, Any]:
    dialog = view.share_dialog
    if dialog is None or dialog.test_id != test_id or not dialog.is_open:
        dialog = view.open_share(test_id)
    await dialog.share(form.email)
    return dialog.snapshot()


@router.delete("/{test_id}/shares/dialog")
async def close_share_dialog(test_id: str, view: ProductTestsView = Depends(_tests_view)) -> Dict[str, Any]:
    if view.share_dialog is not None and view.share_dialog.test_id == test_id:
        view.close_share()
    return view.snapshot()
