"""
Accounts models
"""
from .profile import Profile, Role

__all__ = [
    "Profile",
    "Role",
]
