"""
Sheep allocated to investor contracts
"""
from typing import List

from fastapi import APIRouter, Depends, status

from alifarm.schemas.investors import (
    AllocationCreate,
    ContractSheepResponse,
    DeceasedRequest,
    SaleRequest,
)
from alifarm.services.investors import mappers
from alifarm.services.investors.contract_service import ContractService
from .common import get_contract_service

router = APIRouter()


@router.get("/contracts/{contract_id}/sheep", response_model=List[ContractSheepResponse])
async def list_contract_sheep_api(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
):
    return [mappers.allocation_to_response_dict(row) for row in service.list_contract_sheep(contract_id)]


@router.post(
    "/contracts/{contract_id}/sheep",
    response_model=ContractSheepResponse,
    status_code=status.HTTP_201_CREATED,
)
async def allocate_sheep_api(
    contract_id: int,
    allocation: AllocationCreate,
    service: ContractService = Depends(get_contract_service),
):
    """Allocate a Healthy, unallocated sheep to an Active contract"""
    row = service.allocate_sheep(contract_id, allocation.sheep_id, allocation.purchase_price)
    return mappers.allocation_to_response_dict(row)


@router.delete("/contracts/{contract_id}/sheep/{sheep_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deallocate_sheep_api(
    contract_id: int,
    sheep_id: int,
    service: ContractService = Depends(get_contract_service),
):
    service.deallocate_sheep(contract_id, sheep_id)
    return None


@router.post("/contracts/{contract_id}/sheep/{sheep_id}/sold", response_model=ContractSheepResponse)
async def mark_sheep_sold_api(
    contract_id: int,
    sheep_id: int,
    sale: SaleRequest,
    service: ContractService = Depends(get_contract_service),
):
    row = service.mark_sheep_sold(
        contract_id,
        sheep_id,
        sale_price=sale.sale_price,
        sale_date=sale.sale_date,
        notes=sale.notes,
    )
    return mappers.allocation_to_response_dict(row)


@router.post("/contracts/{contract_id}/sheep/{sheep_id}/deceased", response_model=ContractSheepResponse)
async def mark_sheep_deceased_api(
    contract_id: int,
    sheep_id: int,
    request: DeceasedRequest,
    service: ContractService = Depends(get_contract_service),
):
    row = service.mark_sheep_deceased(contract_id, sheep_id, notes=request.notes)
    return mappers.allocation_to_response_dict(row)
