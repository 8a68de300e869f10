"""Core models exports."""

from .outcomes import Created, NotFound, Success, ValidationFailed

__all__ = ["Created", "NotFound", "Success", "ValidationFailed"]
