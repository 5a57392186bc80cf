"""
import_engine - Catalog CSV import pipeline.

Public API:
    run_import(kind, file_content, replace_existing=False) → ImportReport
"""

from import_engine.importer import run_import        # noqa: F401
from import_engine.report import ImportReport        # noqa: F401
from import_engine.field_map import KINDS            # noqa: F401
