"""Shared fixtures: in-memory database, repository, API client and row factory."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gym_admin import models  # noqa: F401
from gym_admin.core.dependencies import get_db
from gym_admin.core.security import create_access_token
from gym_admin.db.base import Base
from gym_admin.models.access_log import AccessLog
from gym_admin.models.instructor_client import InstructorClient
from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan
from gym_admin.models.profile import Profile
from gym_admin.models.role import Role
from gym_admin.models.user import User
from gym_admin.repositories.finance_repository import FinanceRepository


BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSession()
    for name in ("admin", "instructor", "client"):
        session.add(Role(name=name))
    session.commit()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def repo(db_session: Session) -> FinanceRepository:
    return FinanceRepository(db_session)


class Factory:
    """Inserts rows with sensible defaults for tests."""

    def __init__(self, db: Session):
        self.db = db
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def user(self, role: str = "admin", email: str | None = None, hashed_password: str = "") -> User:
        role_row = self.db.query(Role).filter(Role.name == role).first()
        user = User(
            name=f"{role.title()} {self._next()}",
            email=email or f"{role}{self._counter}@gymdesk.com",
            hashed_password=hashed_password,
            role_id=role_row.id,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def profile(self, enrollment_status: str = "active", **kwargs) -> Profile:
        number = self._next()
        profile = Profile(
            username=kwargs.pop("username", f"member{number}"),
            full_name=kwargs.pop("full_name", f"Member {number}"),
            enrollment_status=enrollment_status,
            monthly_fee=kwargs.pop("monthly_fee", 100.0),
            **kwargs,
        )
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def plan(self, client: Profile, created_at: datetime = BASE_TIME, **kwargs) -> PaymentPlan:
        installments = kwargs.pop("installments", 6)
        total_amount = kwargs.pop("total_amount", 600.0)
        plan = PaymentPlan(
            client_id=client.id,
            total_amount=total_amount,
            installments=installments,
            installment_amount=round(total_amount / installments, 2),
            start_date=kwargs.pop("start_date", date(2025, 1, 1)),
            status=kwargs.pop("status", "active"),
            created_at=created_at,
            **kwargs,
        )
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        return plan

    def payment(self, client: Profile, created_at: datetime = BASE_TIME, **kwargs) -> Payment:
        payment = Payment(
            client_id=client.id,
            amount=kwargs.pop("amount", 100.0),
            status=kwargs.pop("status", "pending"),
            installment_number=kwargs.pop("installment_number", 1),
            total_installments=kwargs.pop("total_installments", 1),
            created_at=created_at,
            **kwargs,
        )
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def plan_payments(self, plan: PaymentPlan, status: str = "pending") -> list[Payment]:
        return [
            self.payment(
                plan.client,
                created_at=plan.created_at,
                plan_id=plan.id,
                amount=plan.installment_amount,
                installment_number=number,
                total_installments=plan.installments,
                status=status,
            )
            for number in range(1, plan.installments + 1)
        ]

    def access_log(self, client: Profile, check_in_at: datetime = BASE_TIME) -> AccessLog:
        log = AccessLog(profile_id=client.id, check_in_at=check_in_at)
        self.db.add(log)
        self.db.commit()
        return log

    def instructor_link(self, instructor: User, client: Profile) -> InstructorClient:
        link = InstructorClient(instructor_id=instructor.id, client_id=client.id, is_active=True)
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        return link


@pytest.fixture
def factory(db_session: Session) -> Factory:
    return Factory(db_session)


@pytest.fixture
def admin_user(factory: Factory) -> User:
    return factory.user(role="admin")


def auth_header_for(user: User) -> dict:
    token = create_access_token(
        data={"sub": user.email, "role": user.role.name, "name": user.name},
        expires_delta=timedelta(minutes=30),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return auth_header_for(admin_user)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    from gym_admin.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    return auth_header_for
