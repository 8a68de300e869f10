"""Books API.

A small record-management service for the books of a fictional store:
FastAPI over SQLModel, configured from config.yaml.
"""

__version__ = "0.1.0"
