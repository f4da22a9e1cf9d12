"""
Investors models package
"""
from .contract import InvestorContract, ContractStatus
from .contract_sheep import ContractSheep, AllocationStatus
from .contract_expense import ContractExpense, ExpenseCategory
from .financial_report import FinancialReport, ReportStatus

__all__ = [
    "InvestorContract",
    "ContractStatus",
    "ContractSheep",
    "AllocationStatus",
    "ContractExpense",
    "ExpenseCategory",
    "FinancialReport",
    "ReportStatus",
]
