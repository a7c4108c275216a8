from ..backend import BackendClient
from ..core.errors import NoRowsError, UserNotFoundError


async def find_profile_id(backend: BackendClient, email: str) -> str:
    """Resolve a registered user's profile id by e-mail.

    Raises:
        UserNotFoundError: no profile carries that e-mail.
    """
    try:
        response = await backend.table("profiles") \
            .select("id") \
            .eq("email", email) \
            .single() \
            .execute()
    except NoRowsError as e:
        raise UserNotFoundError(email) from e
    if not response.data:
        raise UserNotFoundError(email)
    return response.data["id"]
