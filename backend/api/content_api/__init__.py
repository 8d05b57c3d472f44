"""Regional content publishing API."""

__version__ = "0.1.0"
