"""
Test results and rating statistics.

Results are submitted by testers through another channel; this front end
only reads them and summarizes the 1-5 star ratings.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

from ...backend import BackendClient
from ...models import ProductTestResult, RatingStatistics
from ...utils.logging_config import get_logger

STAR_VALUES = (5, 4, 3, 2, 1)


def _round_half_up(value: Decimal, places: str) -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def average_rating(ratings: List[int]) -> float:
    """Arithmetic mean rounded to one decimal; 0 when there are no ratings."""
    if not ratings:
        return 0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(_round_half_up(mean, "0.1"))


def star_percentage(count: int, total: int) -> int:
    """Share of ``total`` as a whole percent; 0 when ``total`` is zero."""
    if total <= 0:
        return 0
    return int(_round_half_up(Decimal(count * 100) / Decimal(total), "1"))


def compute_statistics(results: Iterable[ProductTestResult]) -> RatingStatistics:
    ratings = [result.rating for result in results]
    total = len(ratings)
    return RatingStatistics(
        average_rating=average_rating(ratings),
        total_responses=total,
        distribution={star: star_percentage(ratings.count(star), total) for star in STAR_VALUES},
    )


class ResultsService:
    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logger = get_logger(__name__)

    async def list_results(self, test_id: str) -> List[ProductTestResult]:
        """All results of one test, newest first, with the tester's name and e-mail."""
        response = await self.backend.table("test_results") \
            .select("*, tester:testers(name, email)") \
            .eq("test_id", test_id) \
            .order("created_at", desc=True) \
            .execute()
        results = [ProductTestResult.model_validate(row) for row in response.data or []]
        self.logger.debug(f"Fetched {len(results)} results for test {test_id}")
        return results
