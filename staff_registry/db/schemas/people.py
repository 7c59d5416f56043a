from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from staff_registry.db.models.base import KEY_MAX


class RecordBase(BaseModel):
    key: int = Field(gt=0, le=KEY_MAX)
    first_name: str | None = None
    last_name: str | None = None
    street: str | None = None
    postal_code: str | None = None
    place: str | None = None
    phone: str | None = None
    email: str | None = None
    model_config = ConfigDict(frozen=True)


class Employee(RecordBase):
    kind: Literal["employee"] = "employee"


class ExternalEmployee(RecordBase):
    kind: Literal["external_employee"] = "external_employee"
    company: str = Field(min_length=1)


class Customer(RecordBase):
    kind: Literal["customer"] = "customer"
    industry: str = Field(min_length=1)


Record = Annotated[Union[Employee, ExternalEmployee, Customer], Field(discriminator="kind")]


def category_of(record: RecordBase) -> Optional[str]:
    """Return the category display name of a record, or None for plain employees."""
    if isinstance(record, ExternalEmployee):
        return record.company
    if isinstance(record, Customer):
        return record.industry
    if isinstance(record, Employee):
        return None
    raise TypeError(f"Unknown record variant: {type(record).__name__}")
