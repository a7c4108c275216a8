"""
Page entry point: what the browser shows on load.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ..core.config import AppConfig
from ..core.dependencies import get_app_config, get_root_controller
from ..views import RootController, Screen

router = APIRouter(prefix="/api/app", tags=["app"])


@router.get("")
async def get_app(
    fragment: str = Query("", description="Address fragment the page was loaded with, without '#'"),
    controller: RootController = Depends(get_root_controller),
    config: AppConfig = Depends(get_app_config),
) -> Dict[str, Any]:
    """Decide between confirmation page, loading screen, dashboard and sign-in form."""
    if controller.screen(fragment) != Screen.CONFIRM_EMAIL and controller.mounted:
        await controller.sync_session()

    snapshot = controller.snapshot(fragment)
    snapshot["app_name"] = config.app_name
    snapshot["locale"] = controller.messages.locale
    return snapshot
