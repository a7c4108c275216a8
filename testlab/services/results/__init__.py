from .results_service import ResultsService, average_rating, compute_statistics, star_percentage

__all__ = [
    "ResultsService",
    "average_rating",
    "compute_statistics",
    "star_percentage",
]
