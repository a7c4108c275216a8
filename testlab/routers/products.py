from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import require_dashboard
from ..models.forms import CompanySelection, ProductForm
from ..views import DashboardShell, DashboardView, ProductsView

router = APIRouter(prefix="/api/products", tags=["products"])


async def _products_view(shell: DashboardShell = Depends(require_dashboard)) -> ProductsView:
    return await shell.show(DashboardView.PRODUCTS)


@router.get("")
async def list_products(view: ProductsView = Depends(_products_view)) -> Dict[str, Any]:
    return view.snapshot()


@router.post("/select")
async def select_company(selection: CompanySelection, view: ProductsView = Depends(_products_view)) -> Dict[str, Any]:
    """Show another company's products."""
    await view.select_company(selection.company_id)
    return view.snapshot()


@router.post("")
async def create_product(form: ProductForm, view: ProductsView = Depends(_products_view)) -> Dict[str, Any]:
    await view.create_product(form.name, form.description)
    return view.snapshot()
