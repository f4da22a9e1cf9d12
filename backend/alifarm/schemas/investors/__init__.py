from .contract import (
    ContractCreate,
    ContractResponse,
    ContractSettlementRequest,
    ContractSummaryResponse,
)
from .contract_sheep import (
    AllocationCreate,
    SaleRequest,
    DeceasedRequest,
    ContractSheepResponse,
)
from .contract_expense import ExpenseCreate, ExpenseResponse
from .financial_report import FinancialReportCreate, FinancialReportResponse

__all__ = [
    "ContractCreate",
    "ContractResponse",
    "ContractSettlementRequest",
    "ContractSummaryResponse",
    "AllocationCreate",
    "SaleRequest",
    "DeceasedRequest",
    "ContractSheepResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "FinancialReportCreate",
    "FinancialReportResponse",
]
