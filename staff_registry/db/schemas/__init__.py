"""
Pydantic record schemas.

Records form a tagged union on the ``kind`` field; `category_of` is the one
place that branches on the variant.
"""

from .people import (
    RecordBase,
    Employee,
    ExternalEmployee,
    Customer,
    Record,
    category_of,
)

__all__ = [
    "RecordBase",
    "Employee",
    "ExternalEmployee",
    "Customer",
    "Record",
    "category_of",
]
