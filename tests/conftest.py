"""
Pytest configuration and shared fixtures.

The app runs against an in-memory SQLite database that is recreated for
every test. Email confirmation is off unless a test turns it on.
"""
import os
import sys
from decimal import Decimal
from pathlib import Path

# Must be set before config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-minimum-32-chars-long-for-security"
os.environ["EMAIL_CONFIRMATION_REQUIRED"] = "false"
os.environ.pop("LOG_FILE", None)

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base
from utils.billing_periods import BILLING_PERIODS

PASSWORD = "sunshine42"


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate every table before each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Service-level database session, closed after the test."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Register and sign in a user; returns the Authorization header."""
    def _make_user(email, name="Test User", provider=False, password=PASSWORD):
        response = client.post("/api/auth/register", json={
            "email": email,
            "password": password,
            "name": name,
            "phone": "9876543210",
            "is_solar_provider": provider,
        })
        assert response.status_code == 201, response.text
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _make_user


@pytest.fixture
def make_community(client):
    """Create a community as the given user; returns the response JSON."""
    def _make_community(headers, name="Green Meadows Community", zip_code="600001"):
        response = client.post(
            "/api/communities",
            json={"name": name, "zip_code": zip_code, "description": "Row houses"},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make_community


@pytest.fixture
def energy_entries():
    """Consecutive billing-period entries starting at Jan-Feb 2024."""
    def _entries(count=6, units=400, amount=2000):
        start = BILLING_PERIODS.index("Jan-Feb 2024")
        return [
            {"period": BILLING_PERIODS[start + i], "units": units + 10 * i, "amount": amount + 50 * i}
            for i in range(count)
        ]
    return _entries


@pytest.fixture
def quote_details():
    return {
        "system_size": 24,
        "panel_count": 60,
        "panel_type": "Monocrystalline 400W",
        "inverter_type": "String inverter",
        "warranty_years": 25,
        "estimated_annual_production": 34000,
        "installation_timeframe": "6-8 weeks",
    }


@pytest.fixture
def voting_setup(client, make_user, make_community, quote_details):
    """
    A community of seven households (admin plus six members), an open quote
    request and three provider quotes costing 500000, 450000 and 600000.
    """
    admin = make_user("admin@example.com", "Asha Admin")
    community = make_community(admin)
    members = [admin]
    for i in range(6):
        headers = make_user(f"member{i}@example.com", f"Member {i}")
        response = client.post(
            "/api/communities/join",
            json={"community_code": community["community_code"]},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        members.append(headers)

    response = client.post(f"/api/communities/{community['id']}/quote-requests", headers=admin)
    assert response.status_code == 201, response.text
    request_id = response.json()["id"]

    providers = []
    quote_ids = []
    for i, cost in enumerate((500000, 450000, 600000)):
        headers = make_user(f"provider{i}@example.com", f"Sun Provider {i}", provider=True)
        response = client.post(
            f"/api/quote-requests/{request_id}/quotes",
            json={"total_cost": cost, "details": quote_details},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        providers.append(headers)
        quote_ids.append(response.json()["id"])

    return {
        "admin": admin,
        "members": members,
        "providers": providers,
        "community": community,
        "request_id": request_id,
        "quote_ids": quote_ids,
        "costs": [Decimal("500000"), Decimal("450000"), Decimal("600000")],
    }
