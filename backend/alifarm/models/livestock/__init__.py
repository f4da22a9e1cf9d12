"""
Livestock models
"""
from .sheep import Sheep, SheepStatus, BirthType

__all__ = [
    "Sheep",
    "SheepStatus",
    "BirthType",
]
