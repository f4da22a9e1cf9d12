"""
Monthly financial reports for investors
"""
from typing import List

from fastapi import APIRouter, Depends, status

from alifarm.schemas.investors import FinancialReportCreate, FinancialReportResponse
from alifarm.services.investors import report_service
from alifarm.services.investors.contract_service import ContractService
from .common import get_contract_service

router = APIRouter()


@router.get("/contracts/{contract_id}/reports", response_model=List[FinancialReportResponse])
async def list_reports_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return report_service.list_reports(service, contract_id)


@router.post(
    "/contracts/{contract_id}/reports",
    response_model=FinancialReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_report_api(
    contract_id: int,
    report: FinancialReportCreate,
    service: ContractService = Depends(get_contract_service),
):
    """Draft report with figures taken from the contract summary"""
    return report_service.create_report(
        service,
        contract_id,
        report.report_period,
        highlights=report.highlights,
        notes=report.notes,
        opening_value=report.opening_value,
        closing_value=report.closing_value,
    )


@router.post("/reports/{report_id}/publish", response_model=FinancialReportResponse)
async def publish_report_api(
    report_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return report_service.publish_report(service, report_id)
