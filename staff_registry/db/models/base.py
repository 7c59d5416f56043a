"""
Shared SQLAlchemy base and column helpers.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Range of the 32-bit INTEGER key columns.
KEY_MIN = -2**31
KEY_MAX = 2**31 - 1

# Text attributes shared by every person table, in display order.
PERSON_FIELDS = (
    "first_name",
    "last_name",
    "street",
    "postal_code",
    "place",
    "phone",
    "email",
)


class PersonColumns:
    """Declarative mixin holding the optional contact columns."""

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    street = Column(String(255), nullable=True)
    postal_code = Column(String(20), nullable=True)
    place = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
