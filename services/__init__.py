"""
services - Business-logic layer sitting between API and DB.
"""

from services.catalog_service import CatalogService, SqlReferenceData    # noqa: F401
from services.builder_sessions import BuilderSessions                   # noqa: F401
