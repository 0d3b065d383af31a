from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from app.core import config
from app.db.session import StoreConnection, get_store
from app.services.sitemap_service import build_robots, sitemap_for_store

router = APIRouter(tags=["SEO"])


@router.get("/sitemap.xml", response_class=Response)
def sitemap(store: StoreConnection = Depends(get_store)):
    return Response(content=sitemap_for_store(store, config.SITE_URL), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return PlainTextResponse(build_robots(config.SITE_URL))
