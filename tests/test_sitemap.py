"""
Tests for sitemap.xml and robots.txt generation.
"""
from datetime import datetime, timezone
from xml.etree import ElementTree as ET

import pytest
from fastapi.testclient import TestClient

from app.core import config
from app.db.session import StoreConnection, get_store
from app.main import app
from app.services.job_store import create_job
from app.services.resource_store import create_resource
from app.services.sitemap_service import SITEMAP_NS, build_robots, build_sitemap, sitemap_for_store
from app.services.validation import validate_job_payload, validate_resource_payload

client = TestClient(app)
NS = {"sm": SITEMAP_NS}


@pytest.fixture
def store():
    store = StoreConnection("sqlite:///:memory:").connect()
    create_job(store, validate_job_payload({
        "title": "SDE", "company": "Acme", "externalUrl": "https://x",
        "slug": "acme-sde", "postedAt": "2024-05-01T10:00:00.000Z",
    }))
    create_resource(store, validate_resource_payload({
        "title": "DSA", "summary": "Problems", "slug": "dsa-sheet",
        "updatedAt": "2024-06-01T00:00:00.000Z",
        "materials": [{"title": "A", "url": "http://a"}],
    }))
    try:
        yield store
    finally:
        store.close()


def _entries(xml: str) -> dict:
    root = ET.fromstring(xml.split("\n", 1)[1])
    return {
        url.find("sm:loc", NS).text: url
        for url in root.findall("sm:url", NS)
    }


def test_build_sitemap_lists_static_and_dynamic_pages(store):
    xml = sitemap_for_store(store, "https://example.com/")
    entries = _entries(xml)

    assert "https://example.com" in entries
    assert "https://example.com/resources" in entries
    job = entries["https://example.com/acme-sde"]
    assert job.find("sm:lastmod", NS).text == "2024-05-01T10:00:00.000Z"
    assert job.find("sm:priority", NS).text == "0.8"
    resource = entries["https://example.com/resources/dsa-sheet"]
    assert resource.find("sm:lastmod", NS).text == "2024-06-01T00:00:00.000Z"
    assert resource.find("sm:priority", NS).text == "0.7"


def test_build_sitemap_static_lastmod():
    now = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    entries = _entries(build_sitemap([], [], "https://example.com", now=now))

    assert len(entries) == 5
    home = entries["https://example.com"]
    assert home.find("sm:lastmod", NS).text == "2025-01-02T03:04:05.000Z"
    assert home.find("sm:changefreq", NS).text == "daily"


def test_sitemap_survives_store_failure(store):
    """Test a failing store read leaves only the static pages."""
    store.close()
    entries = _entries(sitemap_for_store(store, "https://example.com"))
    assert len(entries) == 5


def test_robots():
    robots = build_robots("https://example.com")
    assert "Disallow: /leela" in robots
    assert "Disallow: /admin" in robots
    assert "Sitemap: https://example.com/sitemap.xml" in robots


def test_sitemap_endpoint(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        response = client.get("/sitemap.xml")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert f"{config.SITE_URL}/acme-sde" in response.text


def test_robots_endpoint():
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert "User-agent: *" in response.text
