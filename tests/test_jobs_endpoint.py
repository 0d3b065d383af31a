"""
Integration tests for the /api/jobs endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from app.core import config
from app.db.session import StoreConnection, get_store
from app.main import app

client = TestClient(app)


@pytest.fixture(scope="function", autouse=True)
def store():
    """Point the app at a fresh in-memory store for each test."""
    store = StoreConnection("sqlite:///:memory:").connect()
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.clear()
    store.close()


@pytest.fixture
def admin_headers():
    """Log in with the shared secret and return auth headers."""
    response = client.post("/api/admin/login", json={"password": config.ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


SDE_JOB = {"title": "SDE", "company": "Acme", "externalUrl": "https://x", "slug": "acme-sde"}


def test_create_and_fetch_job(admin_headers):
    """Test the create -> get scenario with defaults applied."""
    response = client.post("/api/jobs", json=SDE_JOB, headers=admin_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["id"]
    assert created["postedAt"]

    response = client.get("/api/jobs/acme-sde")
    assert response.status_code == 200
    job = response.json()
    assert job["company"] == "Acme"
    assert job["location"] == "India"
    assert job["tags"] == []
    assert job["externalUrl"] == "https://x"
    assert "pk" not in job
    assert "batch" not in job


def test_create_job_normalizes_slug(admin_headers):
    payload = dict(SDE_JOB, slug="  Acme SDE ")
    response = client.post("/api/jobs", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["slug"] == "acme-sde"


def test_create_job_requires_token():
    """Test writes are rejected without the admin token."""
    response = client.post("/api/jobs", json=SDE_JOB)
    assert response.status_code == 401


def test_create_job_rejects_bad_token():
    response = client.post("/api/jobs", json=SDE_JOB, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_create_job_missing_fields(admin_headers):
    """Test validation failures return 400 with field messages."""
    response = client.post("/api/jobs", json={"title": "SDE", "slug": "x"}, headers=admin_headers)
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert any("company" in message for message in detail)
    assert any("externalUrl" in message for message in detail)


def test_create_job_duplicate_slug(admin_headers):
    """Test duplicate slug returns 409 and keeps the original."""
    client.post("/api/jobs", json=SDE_JOB, headers=admin_headers)

    response = client.post("/api/jobs", json=dict(SDE_JOB, title="Other"), headers=admin_headers)
    assert response.status_code == 409
    assert "acme-sde" in response.json()["detail"]

    assert client.get("/api/jobs/acme-sde").json()["title"] == "SDE"


def test_create_job_duplicate_id(admin_headers):
    client.post("/api/jobs", json=dict(SDE_JOB, id="fixed-id"), headers=admin_headers)

    response = client.post("/api/jobs", json=dict(SDE_JOB, slug="other", id="fixed-id"), headers=admin_headers)
    assert response.status_code == 409
    assert "fixed-id" in response.json()["detail"]
    assert client.get("/api/jobs/other").status_code == 404


def test_create_job_non_object_body(admin_headers):
    """Test a JSON array body is a validation failure, not a 422."""
    response = client.post("/api/jobs", json=[1, 2], headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == ["Request body must be a JSON object."]


def test_create_job_invalid_posted_at(admin_headers):
    response = client.post("/api/jobs", json=dict(SDE_JOB, postedAt="not-a-date"), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == ["postedAt: must be an ISO-8601 timestamp"]


def test_list_jobs_newest_first(admin_headers):
    client.post("/api/jobs", json=dict(SDE_JOB, slug="a", postedAt="2024-01-01T00:00:00.000Z"), headers=admin_headers)
    client.post("/api/jobs", json=dict(SDE_JOB, slug="b", postedAt="2024-02-01T00:00:00.000Z"), headers=admin_headers)

    response = client.get("/api/jobs")
    assert response.status_code == 200
    assert [job["slug"] for job in response.json()["jobs"]] == ["b", "a"]


def test_get_unknown_job():
    response = client.get("/api/jobs/nope")
    assert response.status_code == 404


def test_delete_job(admin_headers):
    """Test delete returns the removed job and it disappears from the list."""
    client.post("/api/jobs", json=SDE_JOB, headers=admin_headers)
    before = client.get("/api/jobs/acme-sde").json()

    response = client.delete("/api/jobs/ACME-SDE", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == before

    assert client.get("/api/jobs").json()["jobs"] == []


def test_delete_unknown_job(admin_headers):
    response = client.delete("/api/jobs/ghost", headers=admin_headers)
    assert response.status_code == 404


def test_delete_job_requires_token():
    response = client.delete("/api/jobs/acme-sde")
    assert response.status_code == 401
