import logging

from ..profiles import find_profile_id
from ...backend import BackendClient
from ...core.errors import AlreadySharedError, UniqueViolationError
from ...models import ProductTestShare

logger = logging.getLogger(__name__)


class SharingService:
    """Grants other users access to a single test."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def share_test(self, test_id: str, email: str) -> ProductTestShare:
        """
        Share a test with the user registered under ``email``.

        Raises:
            UserNotFoundError: nobody is registered with that e-mail.
            AlreadySharedError: the (test, user) share exists already. The
                backend's unique key is the only check.
        """
        user_id = await find_profile_id(self.backend, email)
        share = ProductTestShare(test_id=test_id, shared_with_user_id=user_id)

        try:
            await self.backend.table("test_shares").insert(share.model_dump()).execute()
        except UniqueViolationError as e:
            raise AlreadySharedError(test_id, user_id) from e

        logger.info(f"Test {test_id} shared with {user_id}")
        return share
