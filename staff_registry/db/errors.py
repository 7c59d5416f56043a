"""
Failure taxonomy of the records core.

A missing row is never an error; lookups return ``None`` instead. Everything
below propagates to the caller unmodified.
"""
from __future__ import annotations

from typing import Dict


class RegistryError(Exception):
    """Base class for failures raised by the records core."""


class DataAccessFailure(RegistryError):
    """A connection could not be obtained or a statement failed.

    Covers network and credential problems, schema mismatches and constraint
    violations such as a duplicate or non-positive key.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class CategoryResolutionFailure(RegistryError):
    """A category name could be neither found nor created after one retry."""

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"Could not resolve {category} id for name {name!r}")

    def to_dict(self) -> Dict[str, str]:
        return {
            "error_type": "CategoryResolutionFailure",
            "category": self.category,
            "name": self.name,
            "message": str(self),
        }
