from sqlalchemy import Column, Integer, String, UniqueConstraint
from .base import Base


class Company(Base):
    __tablename__ = 'companies'
    company_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint('name', name='uq_companies_name'),
    )


class Industry(Base):
    __tablename__ = 'industries'
    industry_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint('name', name='uq_industries_name'),
    )
