"""TestLab: admin front end for a hosted product-testing backend."""

__version__ = "1.0.0"
