"""API test fixtures: in-memory dataset + FastAPI test client.

Invariants:
    - get_dataset_provider overridden with an InMemoryDataset (no file IO)
    - get_reference_time pinned to NOW so derived fields are deterministic
    - Overrides cleared after every test

Design Decisions:
    - use_records lets a test swap the dataset for one request set without a new client
    - ASGITransport drives the app in-process; the lifespan is not run, so tests
      never reconfigure root logging
"""

import pytest
from httpx import ASGITransport, AsyncClient

from microcred.api.dependencies import get_dataset_provider, get_reference_time
from microcred.infrastructure.dataset import InMemoryDataset
from microcred.main import app
from tests.builders import NOW, certificate_record, days_ago, days_ahead, user_record


@pytest.fixture
def portfolio_records():
    """Two users; user1 has one recent, one expired and one expiring certificate."""
    return {
        "user1": user_record([
            certificate_record(
                id="py", courseName="Python Basics", platform="Coursera",
                category="Programming", completionDate=days_ago(10), hours=20,
                grade="95", skills=["Python"],
            ),
            certificate_record(
                id="ds", courseName="Data Science", platform="edX",
                category="Data Science", completionDate="2023-11-01", hours=40,
                grade=88, expiryDate=days_ago(5), skills=["Python", "Pandas"],
                description="Statistics and modelling",
            ),
            certificate_record(
                id="pm", courseName="Project Management", platform="Udemy",
                category="Business", completionDate="2024-03-01", hours=15,
                verificationStatus="Pending", expiryDate=days_ahead(10),
                skills=["Leadership"], description="Planning and delivery",
            ),
        ]),
        "user2": user_record(
            [certificate_record(
                id="ml", courseName="Machine Learning", category="AI",
                completionDate="2024-02-01", skills=["ML"], description="Models",
            )],
            id="user2", name="Bob Smith", email="bob@example.com",
        ),
    }


@pytest.fixture
def use_records():
    """Serve the given raw records for the rest of the test."""
    def _use(records):
        app.dependency_overrides[get_dataset_provider] = lambda: InMemoryDataset(records)
    return _use


@pytest.fixture
async def client(portfolio_records, use_records):
    """FastAPI test client with dataset and clock overridden."""
    use_records(portfolio_records)
    app.dependency_overrides[get_reference_time] = lambda: NOW
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
