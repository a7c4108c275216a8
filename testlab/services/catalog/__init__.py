"""Catalog services: products, product tests and test participants."""

from .product_service import ProductService
from .product_test_service import ProductTestService
from .tester_service import TesterService

__all__ = [
    "ProductService",
    "ProductTestService",
    "TesterService",
]
