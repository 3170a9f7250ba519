"""
CFIP: SQLAlchemy Models
Reference data for the emissions calculator
"""
import uuid

from sqlalchemy import (
    Column, String, Integer, DateTime, Float, Uuid,
    CheckConstraint, UniqueConstraint, Index
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from carbon.emission_factors import DEFAULT_REGION, EmissionFactor

Base = declarative_base()


class EmissionFactorRecord(Base):
    """
    Emission factor catalogue, one row per (mode, fuel, region).

    co2_factor in kg per tonne-km, ch4/n2o factors in grams per tonne-km.
    """
    __tablename__ = "emission_factors"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    transport_mode = Column(String(20), nullable=False)
    fuel_type = Column(String(30), nullable=False)
    region = Column(String(50), nullable=False, default=DEFAULT_REGION)
    co2_factor = Column(Float, nullable=False)
    ch4_factor = Column(Float)
    n2o_factor = Column(Float)
    source = Column(String(50))  # EPA, IPCC, IMO, ICAO
    year = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=func.now())

    __table_args__ = (
        UniqueConstraint("transport_mode", "fuel_type", "region", name="uq_emission_factor_key"),
        CheckConstraint("co2_factor >= 0", name="check_co2_factor_non_negative"),
        CheckConstraint("ch4_factor IS NULL OR ch4_factor >= 0", name="check_ch4_factor_non_negative"),
        CheckConstraint("n2o_factor IS NULL OR n2o_factor >= 0", name="check_n2o_factor_non_negative"),
        Index("ix_emission_factors_mode_region", "transport_mode", "region"),
    )

    @classmethod
    def from_emission_factor(cls, factor: EmissionFactor) -> "EmissionFactorRecord":
        return cls(
            transport_mode=factor.transport_mode,
            fuel_type=factor.fuel_type,
            region=factor.region,
            co2_factor=factor.co2_factor,
            ch4_factor=factor.ch4_factor,
            n2o_factor=factor.n2o_factor,
            source=factor.source,
            year=factor.year,
        )

    def to_emission_factor(self) -> EmissionFactor:
        return EmissionFactor(
            transport_mode=self.transport_mode,
            fuel_type=self.fuel_type,
            region=self.region,
            co2_factor=self.co2_factor,
            ch4_factor=self.ch4_factor,
            n2o_factor=self.n2o_factor,
            source=self.source,
            year=self.year,
        )

    def __repr__(self):
        return f"<EmissionFactorRecord {self.transport_mode}/{self.fuel_type}/{self.region}>"
