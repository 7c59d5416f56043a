"""
Domain-split SQLAlchemy models.

Exposes `Base`, the shared person field list and all ORM classes.
"""

from .base import Base, PERSON_FIELDS, KEY_MIN, KEY_MAX  # re-export

from .categories import Company, Industry
from .people import Employee, ExternalEmployee, Customer

__all__ = [
    # base
    "Base",
    "PERSON_FIELDS",
    "KEY_MIN",
    "KEY_MAX",
    # lookups
    "Company",
    "Industry",
    # people
    "Employee",
    "ExternalEmployee",
    "Customer",
]
