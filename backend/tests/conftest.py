"""Shared fixtures: in-memory SQLite database, seeded profiles/sheep, API client."""
import os
import sys
import uuid
from datetime import date
from decimal import Decimal

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("READ_RETRY_BASE_DELAY", "0")
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from alifarm.core.database import Base, get_db
from alifarm.models import InvestorContract, Profile, Role, Sheep
from alifarm.services.investors.contract_repository import ContractRepository
from alifarm.services.investors.contract_service import ContractService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date(2026, 3, 15)


@pytest.fixture
def service(db, today):
    return ContractService(ContractRepository(db), today=lambda: today)


@pytest.fixture
def investor(db):
    profile = Profile(
        id=str(uuid.uuid4()),
        name="Budi Santoso",
        email="budi@example.com",
        role=Role.INVESTOR.value,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def staff(db):
    profile = Profile(
        id=str(uuid.uuid4()),
        name="Farm Staff",
        email="staff@example.com",
        role=Role.STAFF.value,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def make_sheep(db):
    counter = {"n": 0}

    def _make(market_value="5200000", purchase_price="4500000", status="Healthy", birth_type="Purchased"):
        counter["n"] += 1
        sheep = Sheep(
            tag_id=f"T-{counter['n']:03d}",
            breed="Garut",
            gender="Female",
            status=status,
            purchase_price=Decimal(purchase_price) if purchase_price is not None else None,
            market_value=Decimal(market_value) if market_value is not None else None,
            birth_type=birth_type,
        )
        db.add(sheep)
        db.commit()
        db.refresh(sheep)
        return sheep

    return _make


@pytest.fixture
def sheep(make_sheep):
    return make_sheep()


@pytest.fixture
def contract(service, investor, today) -> InvestorContract:
    """Scenario contract: principal 4,500,000 with a 70% investor share."""
    return service.create_contract(
        investor_id=investor.id,
        investment_amount=Decimal("4500000"),
        profit_sharing_percentage=Decimal("70"),
        duration_months=12,
        start_date=today,
    )


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from alifarm.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
