"""Errors raised by the investor contract services"""
from __future__ import annotations


class ContractError(Exception):
    """Base class for investor contract failures."""

    error_type = "contract_error"


class NotFound(ContractError, LookupError):
    """Referenced contract, animal, allocation or expense does not exist."""

    error_type = "not_found"


class InvalidState(ContractError):
    """Operation not allowed in the contract's current status."""

    error_type = "invalid_state"


class Conflict(ContractError):
    """The animal already has an active allocation."""

    error_type = "conflict"


class ValidationError(ContractError, ValueError):
    """Malformed input, rejected before any write."""

    error_type = "validation_error"


class TransientStorageError(ContractError):
    """The database is unreachable or timed out."""

    error_type = "storage_unavailable"
