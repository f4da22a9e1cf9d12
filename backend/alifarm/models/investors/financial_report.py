"""
FinancialReport model - Periodic reports published to investors
"""
import enum

from sqlalchemy import Column, Integer, String, Date, Numeric, DateTime, ForeignKey, Text, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from alifarm.core.database import Base


class ReportStatus(str, enum.Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"


class FinancialReport(Base):
    __tablename__ = "financial_reports"

    id = Column(Integer, primary_key=True, index=True)
    contract_id = Column(Integer, ForeignKey("investor_contracts.id", ondelete="CASCADE"), nullable=False, index=True)

    report_period = Column(String(7), nullable=False)  # YYYY-MM
    report_date = Column(Date, nullable=False)

    # Values
    opening_value = Column(Numeric(14, 2), nullable=False, server_default="0")
    closing_value = Column(Numeric(14, 2), nullable=False, server_default="0")
    total_expenses = Column(Numeric(14, 2), nullable=False, server_default="0")
    total_revenue = Column(Numeric(14, 2), nullable=False, server_default="0")

    # Herd summary
    sheep_count = Column(Integer, nullable=False, server_default="0")
    sheep_born = Column(Integer, nullable=False, server_default="0")
    sheep_sold = Column(Integer, nullable=False, server_default="0")
    sheep_deceased = Column(Integer, nullable=False, server_default="0")

    highlights = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, server_default=ReportStatus.DRAFT.value)
    published_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    contract = relationship("InvestorContract", back_populates="reports")

    __table_args__ = (
        CheckConstraint("status IN ('Draft', 'Published')"),
        UniqueConstraint("contract_id", "report_period", name="uq_financial_reports_contract_period"),
    )

    def __repr__(self):
        return f"<FinancialReport(contract_id={self.contract_id}, period='{self.report_period}', status='{self.status}')>"
