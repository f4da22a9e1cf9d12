from .sheep import SheepCreate, SheepUpdate, SheepResponse

__all__ = [
    "SheepCreate",
    "SheepUpdate",
    "SheepResponse",
]
