import pytest
from pydantic import TypeAdapter, ValidationError

from staff_registry.db import schemas


record_adapter = TypeAdapter(schemas.Record)


def test_record_union_dispatches_on_kind():
    ext = record_adapter.validate_python({"kind": "external_employee", "key": 4, "company": "Acme"})
    cust = record_adapter.validate_python({"kind": "customer", "key": 9, "industry": "Finance"})
    emp = record_adapter.validate_python({"kind": "employee", "key": 1, "first_name": "Ada"})

    assert isinstance(ext, schemas.ExternalEmployee)
    assert isinstance(cust, schemas.Customer)
    assert isinstance(emp, schemas.Employee)
    assert emp.last_name is None


def test_unknown_kind_is_rejected():
    with pytest.raises(ValidationError):
        record_adapter.validate_python({"kind": "supplier", "key": 1})


def test_category_is_required_and_non_empty():
    with pytest.raises(ValidationError):
        schemas.ExternalEmployee(key=1)
    with pytest.raises(ValidationError):
        schemas.Customer(key=1, industry="")


def test_category_of_each_variant():
    assert schemas.category_of(schemas.ExternalEmployee(key=1, company="Acme")) == "Acme"
    assert schemas.category_of(schemas.Customer(key=2, industry="Retail")) == "Retail"
    assert schemas.category_of(schemas.Employee(key=3)) is None


def test_category_of_rejects_foreign_types():
    with pytest.raises(TypeError):
        schemas.category_of(schemas.RecordBase(key=1))


def test_records_are_immutable():
    emp = schemas.Employee(key=1, first_name="Ada")
    with pytest.raises(ValidationError):
        emp.first_name = "Grace"


@pytest.mark.parametrize("key", [0, -4, 2**31, 2**70])
def test_key_must_fit_a_positive_integer_column(key):
    with pytest.raises(ValidationError):
        schemas.Employee(key=key)


def test_largest_column_key_is_accepted():
    assert schemas.Employee(key=2**31 - 1).key == 2**31 - 1
