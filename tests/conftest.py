"""Pytest fixtures for testing"""

import threading
import pytest
from typing import Dict, Generator, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from barcode_gateway.api.main import create_app
from barcode_gateway.infrastructure.database.models import Base, QuotaAccount
from barcode_gateway.infrastructure.database.session import get_db
from barcode_gateway.domain.models import AccountSnapshot


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def seeded_account(db: Session) -> QuotaAccount:
    """Quota account with a balance of 5 and no applied request yet"""
    account = QuotaAccount(id="acct_1", balance=5, last_idempotency_key=None)
    db.add(account)
    db.commit()
    return account


class InMemoryAccountStore:
    """Thread-safe AccountStore double; the lock makes conditional_deduct a real CAS"""

    def __init__(self, accounts: Optional[Dict[str, int]] = None):
        self._lock = threading.Lock()
        self._rows: Dict[str, dict] = {
            account_id: {"balance": balance, "last_key": None}
            for account_id, balance in (accounts or {}).items()
        }
        self.writes = 0

    def read_balance(self, account_id: str) -> Optional[AccountSnapshot]:
        with self._lock:
            row = self._rows.get(account_id)
            if row is None:
                return None
            return AccountSnapshot(account_id, row["balance"], row["last_key"])

    def conditional_deduct(self, account_id, amount, expected_prior_key, new_key) -> Optional[int]:
        with self._lock:
            row = self._rows.get(account_id)
            if row is None or row["last_key"] != expected_prior_key or row["balance"] < amount:
                return None
            row["balance"] -= amount
            row["last_key"] = new_key
            self.writes += 1
            return row["balance"]


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    """In-memory store holding account 'acct' with balance 5"""
    return InMemoryAccountStore({"acct": 5})


@pytest.fixture
def make_account_store():
    """Factory for in-memory stores with custom starting balances"""
    return InMemoryAccountStore


class RacingStore:
    """Store whose conditional write always loses to a concurrent writer holding winner_key"""

    def __init__(self, winner_key: str):
        self.winner_key = winner_key
        self.reads = 0

    def read_balance(self, account_id: str) -> AccountSnapshot:
        self.reads += 1
        if self.reads == 1:
            return AccountSnapshot(account_id, 5, None)
        return AccountSnapshot(account_id, 2, self.winner_key)

    def conditional_deduct(self, account_id, amount, expected_prior_key, new_key) -> Optional[int]:
        return None


class BrokenStore:
    """Store whose backend is down"""

    def read_balance(self, account_id: str) -> Optional[AccountSnapshot]:
        raise RuntimeError("connection reset by peer")

    def conditional_deduct(self, account_id, amount, expected_prior_key, new_key) -> Optional[int]:
        raise RuntimeError("connection reset by peer")


@pytest.fixture
def make_racing_store():
    """Factory for stores that lose every conditional write"""
    return RacingStore


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()
