"""
Sheep registry endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from alifarm.core.database import get_db
from alifarm.schemas.livestock import SheepCreate, SheepResponse, SheepUpdate
from alifarm.services.livestock.sheep_service import (
    create_sheep,
    get_available_sheep,
    get_sheep,
    get_sheep_list,
    update_sheep,
)

router = APIRouter()


@router.get("/sheep", response_model=List[SheepResponse])
async def get_sheep_list_api(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return get_sheep_list(db=db, status=status_filter, skip=skip, limit=limit)


@router.get("/sheep/available", response_model=List[SheepResponse])
async def get_available_sheep_api(db: Session = Depends(get_db)):
    """Healthy sheep that can be allocated to a contract"""
    return get_available_sheep(db=db)


@router.get("/sheep/{sheep_id}", response_model=SheepResponse)
async def get_sheep_api(sheep_id: int, db: Session = Depends(get_db)):
    sheep = get_sheep(db=db, sheep_id=sheep_id)
    if not sheep:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sheep {sheep_id} not found",
        )
    return sheep


@router.post("/sheep", response_model=SheepResponse, status_code=status.HTTP_201_CREATED)
async def create_sheep_api(sheep: SheepCreate, db: Session = Depends(get_db)):
    try:
        return create_sheep(db=db, sheep=sheep)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.put("/sheep/{sheep_id}", response_model=SheepResponse)
async def update_sheep_api(
    sheep_id: int,
    sheep_update: SheepUpdate,
    db: Session = Depends(get_db),
):
    """Update registry data; a new market_value moves the live contract summaries"""
    db_sheep = update_sheep(db=db, sheep_id=sheep_id, sheep_update=sheep_update)
    if not db_sheep:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sheep {sheep_id} not found",
        )
    return db_sheep
