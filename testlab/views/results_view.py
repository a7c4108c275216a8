from typing import Any, Dict, List

from .base import CancellationToken, ViewModel
from ..core.messages import Messages
from ..models import ProductTestResult, RatingStatistics
from ..services.results import ResultsService, compute_statistics


class ResultsView(ViewModel):
    """Results of one test with their rating summary. Read-only."""

    name = "results"
    fetch_error_key = "results.fetch_failed"

    def __init__(self, messages: Messages, results: ResultsService, test_id: str):
        super().__init__(messages)
        self.service = results
        self.test_id = test_id
        self.results: List[ProductTestResult] = []
        self.statistics = RatingStatistics()

    async def fetch(self, token: CancellationToken) -> List[ProductTestResult]:
        return await self.service.list_results(self.test_id)

    def apply(self, result: List[ProductTestResult]) -> None:
        self.results = result
        self.statistics = compute_statistics(result)

    def data(self) -> Dict[str, Any]:
        return {
            "test_id": self.test_id,
            "results": [r.model_dump(mode="json") for r in self.results],
            "statistics": self.statistics.model_dump(mode="json"),
        }
