from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.dependencies import get_error_handler, get_root_controller, get_session_store
from ..core.errors import ApplicationError, ErrorHandler
from ..models.forms import CallbackRequest, CredentialsForm
from ..services.session import SessionStore
from ..views import RootController

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/sign-in")
async def sign_in(
    form: CredentialsForm,
    controller: RootController = Depends(get_root_controller),
) -> Dict[str, Any]:
    """Sign in; a rejected attempt comes back as ``form_error``, not as an HTTP error."""
    await controller.sign_in(form.email, form.password)
    return controller.snapshot()


@router.post("/sign-up")
async def sign_up(
    form: CredentialsForm,
    controller: RootController = Depends(get_root_controller),
) -> Dict[str, Any]:
    await controller.sign_up(form.email, form.password)
    return controller.snapshot()


@router.post("/sign-out")
async def sign_out(
    controller: RootController = Depends(get_root_controller),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Dict[str, Any]:
    try:
        await controller.sign_out()
    except ApplicationError:
        raise
    except Exception as exc:
        error_handler.raise_internal("sign out", exc)
    return controller.snapshot()


@router.get("/session")
async def get_session(
    session_store: SessionStore = Depends(get_session_store),
    error_handler: ErrorHandler = Depends(get_error_handler),
) -> Dict[str, Any]:
    try:
        session = await session_store.get_current_session()
    except ApplicationError:
        raise
    except Exception as exc:
        error_handler.raise_internal("read session", exc)

    if session is None:
        return {"authenticated": False, "user": None, "expires_at": None}
    user = session.user
    return {
        "authenticated": True,
        "user": {"id": user.id, "email": user.email} if user else None,
        "expires_at": session.expires_at,
    }


@router.post("/callback")
async def confirm_email(
    request: CallbackRequest,
    controller: RootController = Depends(get_root_controller),
) -> Dict[str, Any]:
    """Handle the redirect from the sign-up confirmation e-mail."""
    result = await controller.confirm_email(request.fragment)
    return result.model_dump(mode="json")
