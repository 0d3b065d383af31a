import logging

from app.db.session import StoreConnection
from app.db.models import Job, Resource

logger = logging.getLogger(__name__)


def init_db(store: StoreConnection) -> None:
    """Declare every collection up front so the first request does not pay for it."""
    for model in (Job, Resource):
        store.collection(model)
        logger.info(f"Collection ready: {model.__tablename__}")
