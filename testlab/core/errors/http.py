from fastapi import Request
from fastapi.responses import JSONResponse

from .domain import ApplicationError


def application_error_response(error: ApplicationError) -> JSONResponse:
    """Build a JSON response for the given ``ApplicationError``."""
    return JSONResponse(status_code=error.status_code, content=error.as_dict())


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Exception handler registered on the app for every ``ApplicationError``."""
    return application_error_response(exc)
