"""
Caller identity for investor-facing endpoints.

The identity provider signs the bearer token upstream; this layer reads its
subject, loads the matching profile and checks the role.
"""
from __future__ import annotations

import base64
import json
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from alifarm.core.database import get_db
from alifarm.models.accounts.profile import Profile, Role

BEARER = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def token_subject(token: str) -> Optional[str]:
    """`sub` claim of a compact JWS, or None when the token cannot be read."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    claims_segment = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(claims_segment))
    except ValueError:
        return None
    if not isinstance(claims, dict):
        return None
    subject = claims.get("sub")
    return subject if isinstance(subject, str) and subject else None


def get_current_profile(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    db: Session = Depends(get_db),
) -> Profile:
    if not authorization or not authorization.startswith(BEARER):
        raise _unauthorized("Bearer token required")

    subject = token_subject(authorization[len(BEARER):].strip())
    if subject is None:
        raise _unauthorized("Invalid token")

    profile = db.query(Profile).filter(Profile.id == subject).first()
    if profile is None or profile.status != "Active":
        raise _unauthorized("Unknown or inactive profile")
    return profile


def get_current_investor(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Only investors see the investor portal."""
    if profile.role != Role.INVESTOR.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role {profile.role} has no investor portfolio",
        )
    return profile
