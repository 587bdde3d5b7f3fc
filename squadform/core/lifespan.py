import logging
from contextlib import asynccontextmanager

from squadform.storage.db import init_db
from squadform.taxonomy import TaxonomyUnavailable, get_default_taxonomy_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    init_db()
    try:
        taxonomy = get_default_taxonomy_provider()
    except TaxonomyUnavailable as exc:
        logger.warning("taxonomy_load_failed: %s", exc)
    else:
        logger.info("taxonomy_loaded categories=%s", len(taxonomy.category_names()))
    yield
