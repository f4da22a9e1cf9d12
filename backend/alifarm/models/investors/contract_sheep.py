"""
ContractSheep model - Allocation of a sheep to an investor contract
"""
import enum

from sqlalchemy import Column, Integer, Date, Numeric, DateTime, ForeignKey, String, Text, CheckConstraint, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class AllocationStatus(str, enum.Enum):
    ACTIVE = "Active"
    SOLD = "Sold"
    DECEASED = "Deceased"


class ContractSheep(Base):
    """
    `purchase_price` is recorded at allocation time and never follows the
    animal's market value.
    """
    __tablename__ = "contract_sheep"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(Integer, ForeignKey("investor_contracts.id", ondelete="CASCADE"), nullable=False, index=True)
    sheep_id = Column(Integer, ForeignKey("sheep.id", ondelete="RESTRICT"), nullable=False, index=True)

    allocation_date = Column(Date, nullable=False)
    purchase_price = Column(Numeric(14, 2), nullable=False)

    # Disposition
    sale_date = Column(Date, nullable=True)
    sale_price = Column(Numeric(14, 2), nullable=True)
    status = Column(String(20), nullable=False, server_default=AllocationStatus.ACTIVE.value)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    contract = relationship("InvestorContract", back_populates="sheep")
    sheep = relationship("Sheep", back_populates="allocations")

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Sold', 'Deceased')"),
        CheckConstraint("purchase_price >= 0"),
        # An animal has at most one active allocation
        Index(
            "uq_contract_sheep_active_sheep",
            "sheep_id",
            unique=True,
            postgresql_where=text("status = 'Active'"),
            sqlite_where=text("status = 'Active'"),
        ),
    )

    def __repr__(self):
        return f"<ContractSheep(contract_id={self.contract_id}, sheep_id={self.sheep_id}, status='{self.status}')>"
