"""
sitemap.xml and robots.txt for search engines.

Built from the job and resource stores so every published slug is listed.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, TypeVar
from xml.etree import ElementTree as ET

from app.core.timestamps import utc_timestamp
from app.db.session import StoreConnection
from app.services.job_store import list_jobs
from app.services.resource_store import list_resources

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, changefreq, priority)
STATIC_PAGES = [
    ("", "daily", 1.0),
    ("/about", "monthly", 0.8),
    ("/contact", "monthly", 0.8),
    ("/privacy-policy", "monthly", 0.5),
    ("/resources", "weekly", 0.9),
]

DISALLOWED_PATHS = ["/leela", "/admin"]

T = TypeVar("T")


def _safe_list(loader: Callable[[StoreConnection], List[T]], store: StoreConnection, label: str) -> List[T]:
    try:
        return loader(store)
    except Exception as e:
        # Section is left empty on failure
        logger.error(f"Error fetching {label} for sitemap: {e}", exc_info=True)
        return []


def _add_url(urlset: ET.Element, loc: str, lastmod: str, changefreq: str, priority: float) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    ET.SubElement(url, "lastmod").text = lastmod
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = f"{priority:.1f}"


def build_sitemap(
    jobs: Sequence,
    resources: Sequence,
    base_url: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the sitemap XML.

    Args:
        jobs: Job records (need slug and posted_at)
        resources: Resource records (need slug and updated_at)
        base_url: Public site URL without trailing slash
        now: lastmod for static pages (default: current UTC time)
    """
    base_url = base_url.rstrip("/")
    static_lastmod = utc_timestamp(now or datetime.now(timezone.utc))

    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for path, changefreq, priority in STATIC_PAGES:
        _add_url(urlset, f"{base_url}{path}", static_lastmod, changefreq, priority)
    for job in jobs:
        _add_url(urlset, f"{base_url}/{job.slug}", job.posted_at, "weekly", 0.8)
    for resource in resources:
        _add_url(urlset, f"{base_url}/resources/{resource.slug}", resource.updated_at, "weekly", 0.7)

    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def sitemap_for_store(store: StoreConnection, base_url: str) -> str:
    jobs = _safe_list(list_jobs, store, "jobs")
    resources = _safe_list(list_resources, store, "resources")
    return build_sitemap(jobs, resources, base_url)


def build_robots(base_url: str) -> str:
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += ["", f"Sitemap: {base_url.rstrip('/')}/sitemap.xml", ""]
    return "\n".join(lines)
