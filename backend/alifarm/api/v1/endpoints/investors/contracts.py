"""
Investor contract endpoints
"""
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from alifarm.api.auth import get_current_investor
from alifarm.models.accounts.profile import Profile
from alifarm.models.investors import ContractStatus
from alifarm.schemas.investors import (
    ContractCreate,
    ContractResponse,
    ContractSettlementRequest,
    ContractSummaryResponse,
)
from alifarm.services.investors import mappers
from alifarm.services.investors.contract_service import ContractService
from alifarm.utils.pdf_generator import generate_contract_statement_pdf
from .common import get_contract_service

router = APIRouter()


@router.get("/contracts", response_model=List[ContractResponse])
async def list_contracts_api(
    investor_id: Optional[str] = Query(None, description="Filter by investor profile"),
    status_filter: Optional[ContractStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    service: ContractService = Depends(get_contract_service),
):
    """All contracts, newest first"""
    return service.list_contracts(
        investor_id=investor_id,
        status=status_filter.value if status_filter else None,
        skip=skip,
        limit=limit,
    )


@router.get("/me/contracts", response_model=List[ContractResponse])
async def list_my_contracts_api(
    investor: Profile = Depends(get_current_investor),
    service: ContractService = Depends(get_contract_service),
):
    """Contracts of the authenticated investor"""
    return service.list_contracts(investor_id=investor.id)


@router.post("/contracts", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract_api(
    contract: ContractCreate,
    service: ContractService = Depends(get_contract_service),
):
    return service.create_contract(
        investor_id=contract.investor_id,
        investment_amount=contract.investment_amount,
        profit_sharing_percentage=contract.profit_sharing_percentage,
        duration_months=contract.duration_months,
        start_date=contract.start_date,
    )


@router.get("/contracts/{contract_id}", response_model=ContractResponse)
async def get_contract_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return service.get_contract(contract_id)


@router.post("/contracts/{contract_id}/cancel", response_model=ContractResponse)
async def cancel_contract_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return service.cancel_contract(contract_id)


@router.get("/contracts/{contract_id}/summary", response_model=ContractSummaryResponse)
async def get_contract_summary_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    """Live figures for Active contracts, frozen figures once Completed"""
    return asdict(service.get_contract_summary(contract_id))


@router.post("/contracts/{contract_id}/complete", response_model=ContractResponse)
async def complete_contract_api(
    contract_id: int,
    settlement: ContractSettlementRequest,
    service: ContractService = Depends(get_contract_service),
):
    """
    Settle the contract. Revenue and expenses default to the current summary
    totals when not supplied.
    """
    total_revenue = settlement.total_revenue
    total_expenses = settlement.total_expenses
    if total_revenue is None or total_expenses is None:
        summary = service.get_contract_summary(contract_id)
        if total_revenue is None:
            total_revenue = summary.total_revenue
        if total_expenses is None:
            total_expenses = summary.total_expenses

    return service.complete_contract(
        contract_id,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        notes=settlement.notes,
    )


@router.get("/contracts/{contract_id}/statement.pdf")
async def get_contract_statement_pdf_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    """Downloadable investor statement"""
    contract = service.get_contract(contract_id)
    summary = service.get_contract_summary(contract_id)
    statement_data = {
        "contract": ContractResponse.model_validate(contract).model_dump(),
        "summary": asdict(summary),
        "sheep": [mappers.allocation_to_response_dict(row) for row in service.list_contract_sheep(contract_id)],
        "expenses": [mappers.expense_to_response_dict(row) for row in service.list_contract_expenses(contract_id)],
    }
    pdf_buffer = generate_contract_statement_pdf(statement_data)
    filename = f"statement_{contract.contract_number}.pdf"
    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
