"""
Investors Module - Router aggregation

Structure:
- contracts: contract lifecycle, summary, settlement and PDF statement
- contract_sheep: sheep allocated to a contract (allocate, remove, sold, deceased)
- expenses: operating expenses charged to a contract
- reports: monthly financial reports (Draft -> Published)

Service errors (NotFound, InvalidState, Conflict, ...) are mapped to HTTP
responses by the application-level exception handlers in `alifarm.main`.
"""
from fastapi import APIRouter

from .contracts import router as contracts_router
from .contract_sheep import router as contract_sheep_router
from .expenses import router as expenses_router
from .reports import router as reports_router

router = APIRouter(prefix="/investors", tags=["investors"])

router.include_router(contracts_router)
router.include_router(contract_sheep_router)
router.include_router(expenses_router)
router.include_router(reports_router)
