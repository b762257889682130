# backend/mgnrega_api/models/performance.py
from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, Numeric, CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from mgnrega_api.db.database import Base
from mgnrega_api.services.district_directory import DEFAULT_STATE


class District(Base):
    __tablename__ = "districts"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    code = Column(String(10), unique=True, nullable=False)
    lat = Column(Numeric(10, 6))
    lng = Column(Numeric(10, 6))
    state = Column(String(50), default=DEFAULT_STATE, server_default=DEFAULT_STATE)


class Performance(Base):
    __tablename__ = "performance"
    id = Column(Integer, primary_key=True)
    district_code = Column(String(10), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("month >= 0 AND month <= 11", name="ck_performance_month"),
        CheckConstraint("year >= 2024", name="ck_performance_year"),
        UniqueConstraint("district_code", "month", "year", name="uq_performance_period"),
        Index("ix_performance_recent", "district_code", "year", "month"),
    )
