"""
import_engine.report - Structured result of a catalog import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    kind: str = ""
    total_rows: int = 0
    imported: int = 0          # catalog records added
    replaced: int = 0          # existing records overwritten (replace mode)
    ignored: int = 0           # duplicates left as they were (insert-or-ignore)
    skipped: int = 0           # rows rejected with an error
    errors: list[dict] = field(default_factory=list)     # [{row, reason}]
    warnings: list[str] = field(default_factory=list)

    def add_error(self, row: int, reason: str):
        self.errors.append({"row": row, "reason": reason})
        self.skipped += 1

    def add_warning(self, message: str):
        self.warnings.append(message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "total_rows": self.total_rows,
            "imported": self.imported,
            "replaced": self.replaced,
            "ignored": self.ignored,
            "skipped": self.skipped,
            "errors": self.errors,
            "warnings": self.warnings,
        }
