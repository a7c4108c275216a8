from typing import List, Optional
import logging

from ...backend import BackendClient
from ...models import Tester

logger = logging.getLogger(__name__)


class TesterService:
    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_testers(self) -> List[Tester]:
        response = await self.backend.table("testers").select("*").order("name").execute()
        return [Tester.model_validate(row) for row in response.data or []]

    async def create_tester(self, name: str, email: str, phone: Optional[str] = None) -> None:
        await self.backend.table("testers").insert({
            "name": name,
            "email": email,
            "phone": phone or None,
        }).execute()
        logger.info(f"Tester '{name}' registered")
