"""
Sheep model - Farm animal registry
"""
import enum

from sqlalchemy import Column, Integer, String, Date, Numeric, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class SheepStatus(str, enum.Enum):
    HEALTHY = "Healthy"
    SICK = "Sick"
    SOLD = "Sold"
    DECEASED = "Deceased"
    QUARANTINE = "Quarantine"


class BirthType(str, enum.Enum):
    PURCHASED = "Purchased"
    BORN = "Born"


class Sheep(Base):
    __tablename__ = "sheep"

    id = Column(Integer, primary_key=True, index=True)
    tag_id = Column(String(20), unique=True, nullable=False)

    # Registry data
    breed = Column(String(50), nullable=False)
    dob = Column(Date, nullable=True)
    gender = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, server_default=SheepStatus.HEALTHY.value, index=True)
    cage_id = Column(String(20), nullable=True)
    image_url = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Economic values (whole Rupiah)
    purchase_price = Column(Numeric(14, 2), nullable=True)
    market_value = Column(Numeric(14, 2), nullable=True)

    # Lineage
    parent_male_id = Column(Integer, ForeignKey("sheep.id", ondelete="SET NULL"), nullable=True)
    parent_female_id = Column(Integer, ForeignKey("sheep.id", ondelete="SET NULL"), nullable=True)
    birth_type = Column(String(20), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    allocations = relationship("ContractSheep", back_populates="sheep")

    __table_args__ = (
        CheckConstraint("gender IN ('Male', 'Female')"),
        CheckConstraint("status IN ('Healthy', 'Sick', 'Sold', 'Deceased', 'Quarantine')"),
        CheckConstraint("birth_type IN ('Purchased', 'Born') OR birth_type IS NULL"),
    )

    def __repr__(self):
        return f"<Sheep(id={self.id}, tag_id='{self.tag_id}', status='{self.status}')>"
