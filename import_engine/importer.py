"""
import_engine.importer - Import one catalog CSV (contacts, arrangements or
wire-contact mappings) in a single transaction.

Bad rows are skipped and reported; anything that breaks the session rolls
the whole file back.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from db.engine import get_session
from glenair.models import ContactType
from import_engine.csv_parser import prepare_reader
from import_engine.field_map import KINDS
from import_engine.report import ImportReport
from import_engine.row_processor import RowError, RowProcessor
from services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def run_import(
    kind: str,
    file_content: str | bytes,
    *,
    replace_existing: bool = False,
    contact_type: Optional[ContactType | str] = None,
) -> ImportReport:
    """
    Load `file_content` into the catalog table for `kind`.

    replace_existing overwrites contacts and arrangements that are already
    stored; wire mappings are always insert-or-ignore.  contact_type forces
    Pin/Socket for contact files that have no type column.
    """
    report = ImportReport(kind=kind)
    if kind not in KINDS:
        report.add_error(0, f"Unknown catalog kind {kind!r} (expected one of {', '.join(KINDS)})")
        return report

    reader = prepare_reader(file_content)
    if reader is None:
        report.add_error(0, "CSV has no header row or is empty")
        return report

    try:
        processor = RowProcessor(kind, reader.fieldnames, contact_type=contact_type)
    except (RowError, ValueError) as exc:
        report.add_error(0, str(exc))
        return report

    session = get_session()
    try:
        _load_rows(session, reader, processor, report, replace_existing)
        _audit_arrangements(session, processor.arrangements_seen, report)
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error(f"{kind} import rolled back: {exc}")
        report.add_error(0, f"Fatal import error: {exc}")
    finally:
        session.close()

    logger.info(
        f"{kind} import: {report.imported} added, {report.replaced} replaced, "
        f"{report.ignored} ignored, {report.skipped} skipped / {report.total_rows} rows"
    )
    return report


def _load_rows(session: Session, reader, processor: RowProcessor,
               report: ImportReport, replace_existing: bool) -> None:
    # Line 1 is the header
    for line_no, row in enumerate(reader, start=2):
        report.total_rows += 1
        try:
            outcome = processor.process(session, row, replace_existing)
        except RowError as exc:
            report.add_error(line_no, str(exc))
            continue
        except Exception as exc:
            report.add_error(line_no, f"Unexpected: {exc}")
            continue
        report.imported += outcome.added
        report.replaced += outcome.replaced
        report.ignored += outcome.ignored


def _audit_arrangements(session: Session, arrangements: set[str],
                        report: ImportReport) -> None:
    """Warn about touched arrangements whose size counts miss their total."""
    if not arrangements:
        return
    for v in CatalogService.arrangement_violations(session, arrangements):
        report.add_warning(f"Arrangement {v['arrangement']}: {v['reason']}")
