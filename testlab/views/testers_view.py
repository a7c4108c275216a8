from typing import Any, Dict, List, Optional

from .base import CancellationToken, ViewModel
from ..core.messages import Messages
from ..models import Tester
from ..services.catalog import TesterService


class TesterListView(ViewModel):
    name = "testers"
    fetch_error_key = "testers.fetch_failed"

    def __init__(self, messages: Messages, testers: TesterService):
        super().__init__(messages)
        self.service = testers
        self.testers: List[Tester] = []

    async def fetch(self, token: CancellationToken) -> List[Tester]:
        return await self.service.list_testers()

    def apply(self, result: List[Tester]) -> None:
        self.testers = result

    async def create_tester(self, name: str, email: str, phone: Optional[str] = None) -> bool:
        return await self._mutate(
            lambda: self.service.create_tester(name, email, phone),
            "testers.create_failed",
        )

    def data(self) -> Dict[str, Any]:
        return {"testers": [tester.model_dump(mode="json") for tester in self.testers]}
