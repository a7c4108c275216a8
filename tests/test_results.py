import pytest

from testlab.models import ProductTestResult
from testlab.services.results import ResultsService, average_rating, compute_statistics, star_percentage

from conftest import REST


def make_results(*ratings):
    return [
        ProductTestResult(id=f"r{i}", rating=rating, created_at="2024-01-01T00:00:00Z")
        for i, rating in enumerate(ratings)
    ]


class TestAverageRating:
    def test_rounds_to_one_decimal(self):
        assert average_rating([5, 5, 4]) == 4.7

    def test_half_rounds_up(self):
        assert average_rating([1, 1, 1, 2]) == 1.3
        assert average_rating([4, 5, 5, 5]) == 4.8

    def test_zero_results(self):
        assert average_rating([]) == 0


class TestStarPercentage:
    def test_whole_percent(self):
        assert star_percentage(1, 3) == 33
        assert star_percentage(2, 3) == 67

    def test_zero_total(self):
        assert star_percentage(0, 0) == 0


class TestComputeStatistics:
    def test_distribution_covers_every_star(self):
        stats = compute_statistics(make_results(5, 5, 4))

        assert stats.average_rating == 4.7
        assert stats.total_responses == 3
        assert stats.distribution == {5: 67, 4: 33, 3: 0, 2: 0, 1: 0}

    def test_percentages_sum_to_about_hundred(self):
        stats = compute_statistics(make_results(1, 2, 3, 4, 5, 5, 3))

        assert 98 <= sum(stats.distribution.values()) <= 102

    def test_zero_results(self):
        stats = compute_statistics([])

        assert stats.average_rating == 0
        assert stats.total_responses == 0
        assert stats.distribution == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}


class TestResultsService:
    @pytest.mark.asyncio
    async def test_results_joined_with_tester_newest_first(self, backend, fake_backend):
        fake_backend.add("GET", f"{REST}/test_results", json=[
            {
                "id": "r1",
                "rating": 4,
                "feedback": "Bra",
                "created_at": "2024-03-01T00:00:00Z",
                "tester": {"name": "Kari", "email": "kari@example.com"},
            },
        ])

        results = await ResultsService(backend).list_results("t1")

        assert results[0].tester.name == "Kari"
        request = fake_backend.calls("GET", f"{REST}/test_results")[0]
        assert request.url.params["test_id"] == "eq.t1"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["select"] == "*,tester:testers(name,email)"
