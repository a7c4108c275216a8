from typing import Any, Dict, Optional

from ..core.messages import Messages
from ..services.sharing import SharingService


class ShareDialog:
    """
    Share one test with other users by e-mail.

    Stays open after a successful share so more users can be added; only
    ``close()`` ends it.
    """

    def __init__(self, messages: Messages, sharing: SharingService, test_id: str):
        self.messages = messages
        self.service = sharing
        self.test_id = test_id
        self.email = ""
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.submitting = False
        self.is_open = True

    async def share(self, email: str) -> bool:
        self.email = email
        self.error = None
        self.success = None
        self.submitting = True
        try:
            await self.service.share_test(self.test_id, email)
        except Exception as e:
            self.error = self.messages.for_error(e, "share.failed")
            return False
        finally:
            self.submitting = False

        self.success = self.messages.get("share.success")
        self.email = ""
        return True

    def close(self) -> None:
        self.is_open = False

    def snapshot(self) -> Dict[str, Any]:
        return {
            "test_id": self.test_id,
            "open": self.is_open,
            "email": self.email,
            "submitting": self.submitting,
            "error": self.error,
            "success": self.success,
        }
