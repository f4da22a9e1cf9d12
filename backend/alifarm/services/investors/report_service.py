"""
Financial reports for investors (monthly Draft -> Published)
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from alifarm.models.investors import FinancialReport, ReportStatus
from .contract_service import ContractService
from .errors import InvalidState, NotFound

logger = logging.getLogger(__name__)


def create_report(
    service: ContractService,
    contract_id: int,
    report_period: str,
    highlights: Optional[str] = None,
    notes: Optional[str] = None,
    opening_value=None,
    closing_value=None,
) -> FinancialReport:
    """
    Create a Draft report. Figures come from the current contract summary;
    opening/closing values default to the purchase value and the current
    value of the herd.
    """
    summary = service.get_contract_summary(contract_id)

    report = FinancialReport(
        contract_id=contract_id,
        report_period=report_period,
        report_date=date.today(),
        opening_value=opening_value if opening_value is not None else summary.total_purchase_value,
        closing_value=closing_value if closing_value is not None else summary.total_current_value,
        total_expenses=summary.total_expenses,
        total_revenue=summary.total_revenue,
        sheep_count=summary.total_sheep,
        sheep_born=summary.sheep_born,
        sheep_sold=summary.sheep_sold,
        sheep_deceased=summary.sheep_deceased,
        highlights=highlights,
        notes=notes,
        status=ReportStatus.DRAFT.value,
    )
    report = service.repo.insert_report(report)
    logger.info(f"Draft report {report_period} created for contract {contract_id}")
    return report


def list_reports(service: ContractService, contract_id: int) -> List[FinancialReport]:
    service.get_contract(contract_id)
    return service.repo.list_reports(contract_id)


def publish_report(service: ContractService, report_id: int) -> FinancialReport:
    report = service.repo.get_report(report_id)
    if report is None:
        raise NotFound(f"Report {report_id} not found")

    updated = service.repo.publish_report(
        report_id,
        ReportStatus.DRAFT.value,
        ReportStatus.PUBLISHED.value,
        datetime.now(timezone.utc),
    )
    if not updated:
        raise InvalidState(f"Report {report_id} is already published")

    logger.info(f"Report {report_id} published")
    return service.repo.get_report(report_id)
