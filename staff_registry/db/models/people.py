from sqlalchemy import Column, Integer, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, PersonColumns


class Employee(PersonColumns, Base):
    __tablename__ = 'employees'
    # Caller-assigned, never generated.
    employee_number = Column(Integer, primary_key=True, autoincrement=False)

    __table_args__ = (
        CheckConstraint('employee_number > 0', name='ck_employees_number_positive'),
    )


class ExternalEmployee(PersonColumns, Base):
    __tablename__ = 'external_employees'
    employee_number = Column(Integer, primary_key=True, autoincrement=False)
    company_id = Column(Integer, ForeignKey('companies.company_id'), nullable=False)

    company = relationship("Company")

    __table_args__ = (
        Index('idx_external_employees_company_id', 'company_id'),
        CheckConstraint('employee_number > 0', name='ck_external_employees_number_positive'),
    )


class Customer(PersonColumns, Base):
    __tablename__ = 'customers'
    customer_number = Column(Integer, primary_key=True, autoincrement=False)
    industry_id = Column(Integer, ForeignKey('industries.industry_id'), nullable=False)

    industry = relationship("Industry")

    __table_args__ = (
        Index('idx_customers_industry_id', 'industry_id'),
        CheckConstraint('customer_number > 0', name='ck_customers_number_positive'),
    )
