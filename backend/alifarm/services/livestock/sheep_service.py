"""
Sheep registry service (farm side)
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from alifarm.core.config import settings
from alifarm.models.investors.contract_sheep import AllocationStatus, ContractSheep
from alifarm.models.livestock.sheep import Sheep, SheepStatus
from alifarm.schemas.livestock.sheep import SheepCreate, SheepUpdate


def get_sheep_list(
    db: Session,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Sheep]:
    query = db.query(Sheep)
    if status:
        query = query.filter(Sheep.status == status)
    return query.order_by(Sheep.tag_id).offset(skip).limit(limit).all()


def get_sheep(db: Session, sheep_id: int) -> Optional[Sheep]:
    return db.query(Sheep).filter(Sheep.id == sheep_id).first()


def get_available_sheep(db: Session) -> List[Sheep]:
    """
    Healthy sheep without an active allocation: the candidates offered when
    allocating to a contract.
    """
    allocated = db.query(ContractSheep.sheep_id).filter(
        ContractSheep.status == AllocationStatus.ACTIVE.value
    )
    return (
        db.query(Sheep)
        .filter(
            Sheep.status == SheepStatus.HEALTHY.value,
            ~Sheep.id.in_(allocated),
        )
        .order_by(Sheep.tag_id)
        .all()
    )


def next_tag_id(db: Session) -> str:
    prefix = f"{settings.SHEEP_TAG_PREFIX}-"
    tags = [row[0] for row in db.query(Sheep.tag_id).filter(Sheep.tag_id.like(f"{prefix}%")).all()]
    numbers = []
    for tag in tags:
        try:
            numbers.append(int(tag[len(prefix):]))
        except ValueError:
            continue
    return f"{prefix}{(max(numbers) + 1) if numbers else 1:03d}"


def create_sheep(db: Session, sheep: SheepCreate) -> Sheep:
    data = sheep.model_dump()
    if not data.get("tag_id"):
        data["tag_id"] = next_tag_id(db)

    if db.query(Sheep).filter(Sheep.tag_id == data["tag_id"]).first():
        raise ValueError(f"Tag {data['tag_id']} already exists")

    db_sheep = Sheep(**data)
    db.add(db_sheep)
    db.commit()
    db.refresh(db_sheep)
    return db_sheep


def update_sheep(db: Session, sheep_id: int, sheep_update: SheepUpdate) -> Optional[Sheep]:
    db_sheep = get_sheep(db, sheep_id)
    if not db_sheep:
        return None

    for field, value in sheep_update.model_dump(exclude_unset=True).items():
        setattr(db_sheep, field, value)

    db.commit()
    db.refresh(db_sheep)
    return db_sheep
