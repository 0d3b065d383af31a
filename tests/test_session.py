"""
Tests for StoreConnection and the record mapper.
"""
import pytest
from sqlalchemy import inspect, text

from app.core import config
from app.core.errors import ConfigurationError
from app.db.mapper import to_document, to_job_record
from app.db.models.job import Job
from app.db.models.resource import Resource
from app.db.session import StoreConnection


@pytest.fixture
def store():
    store = StoreConnection("sqlite:///:memory:").connect()
    try:
        yield store
    finally:
        store.close()


def _index(store, table, name):
    for ix in inspect(store.engine).get_indexes(table):
        if ix["name"] == name:
            return ix
    return None


def test_missing_database_url_is_fatal():
    """Test an empty URL is rejected before any connection attempt."""
    with pytest.raises(ConfigurationError):
        StoreConnection(None)
    with pytest.raises(ConfigurationError):
        StoreConnection("")


def test_require_database_url(monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", None)
    with pytest.raises(ConfigurationError):
        config.require_database_url()

    monkeypatch.setattr(config, "DATABASE_URL", "sqlite:///:memory:")
    assert config.require_database_url() == "sqlite:///:memory:"


def test_unreachable_database_is_fatal(tmp_path):
    """Test connect() fails with ConfigurationError when the database cannot be opened."""
    url = f"sqlite:///{tmp_path / 'missing' / 'dir' / 'store.db'}"
    with pytest.raises(ConfigurationError):
        StoreConnection(url).connect()


def test_collection_is_memoized(store):
    assert store.collection(Job) is store.collection(Job)
    assert store.collection(Job) is not store.collection(Resource)
    assert store.collection(Resource).name == "resources"


def test_collection_declares_unique_slug_index(store):
    """Test first use creates the unique slug index on each table."""
    store.collection(Job)
    store.collection(Resource)

    jobs_ix = _index(store, "jobs", "uq_jobs_slug")
    resources_ix = _index(store, "resources", "uq_resources_slug")
    assert jobs_ix is not None and jobs_ix["unique"]
    assert resources_ix is not None and resources_ix["unique"]


def test_schema_declaration_is_idempotent(tmp_path):
    """Test reconnecting to an existing database does not fail or duplicate indexes."""
    url = f"sqlite:///{tmp_path / 'store.db'}"
    first = StoreConnection(url).connect()
    first.collection(Job)
    first.close()

    second = StoreConnection(url).connect()
    second.collection(Job)
    names = [ix["name"] for ix in inspect(second.engine).get_indexes("jobs")]
    assert names.count("uq_jobs_slug") == 1
    second.close()


def test_collection_adds_index_to_existing_table(store):
    """Test a table created without the slug index gets it on first use."""
    with store.engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE jobs (pk INTEGER PRIMARY KEY, id VARCHAR(36), slug VARCHAR, posted_at VARCHAR)"
        ))
    assert _index(store, "jobs", "uq_jobs_slug") is None

    store.collection(Job)

    assert _index(store, "jobs", "uq_jobs_slug") is not None


def test_ping_and_close(store):
    assert store.ping() is True
    store.close()
    assert store.ping() is False
    with pytest.raises(ConfigurationError):
        store.collection(Job)


def test_mapper_strips_internal_key():
    row = Job(
        pk=7, id="abc", slug="acme-sde", title="SDE", company="Acme", location="India",
        external_url="https://x", summary="New job update", tags=[], posted_at="2024-01-01T00:00:00.000Z",
    )
    document = to_document(row)
    assert "pk" not in document
    assert document["external_url"] == "https://x"

    record = to_job_record(row)
    assert record.id == "abc"
    assert "pk" not in record.model_dump()


def test_mapper_supplies_stable_id():
    """Test rows stored without an id still get a public id, the same on every read."""
    row = Job(
        slug="legacy", title="SDE", company="Acme", location="India",
        external_url="https://x", summary="s", tags=[], posted_at="2024-01-01T00:00:00.000Z",
    )
    first = to_job_record(row)
    second = to_job_record(row)
    assert first.id
    assert first.id == second.id
