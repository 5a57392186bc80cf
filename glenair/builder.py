"""
glenair.builder - Guided Series 80 part-number configurator.

Stages advance strictly forward:

    WIRE_SELECTION → CONTACT_SIZE_SELECTION → CONTACT_SELECTION
    → ARRANGEMENT_SELECTION → SHELL_STYLE_SELECTION → SYNTHESIS → COMPLETE

Only reset() goes back.  Committed choices live in a frozen
BuilderSelection and the unlocked choices in a frozen Candidates; both are
replaced wholesale so readers never see a half-applied step.

Every query-issuing step and every reset takes a new generation number.
Results that come back for an older generation are dropped.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from dataclasses import replace
from typing import Callable, Optional

from glenair.models import (
    BuilderResult, BuilderSelection, Candidates, Contact, Stage, WireSystem,
)
from glenair.numbering import synthesize
from glenair.reference import QueryFailure, ReferenceData

logger = logging.getLogger(__name__)


class PartNumberBuilder:
    """
    One configurator session.  The reference-data service is injected so
    tests can pass a fake and the app can pass the SQLAlchemy one.
    """

    def __init__(self, reference: ReferenceData, *,
                 query_timeout: Optional[float] = None):
        self._reference = reference
        self._query_timeout = query_timeout
        self._lock = threading.Lock()
        self._generation = 0
        self._set_initial()

    def _set_initial(self) -> None:
        self._stage = Stage.WIRE_SELECTION
        self._selection = BuilderSelection()
        self._candidates = Candidates()
        self._result: Optional[BuilderResult] = None
        self._error: Optional[str] = None

    # ── Read-only views ────────────────────────────────────────────────

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def selection(self) -> BuilderSelection:
        return self._selection

    @property
    def candidates(self) -> Candidates:
        return self._candidates

    @property
    def result(self) -> Optional[BuilderResult]:
        return self._result

    @property
    def error(self) -> Optional[str]:
        """Message of the last failed lookup, cleared by the next success."""
        return self._error

    def to_dict(self) -> dict:
        return {
            "stage": self._stage.name,
            "selection": self._selection.to_dict(),
            "candidates": self._candidates.to_dict(),
            "result": self._result.to_dict() if self._result else None,
            "error": self._error,
        }

    # ── Step 1: wire ───────────────────────────────────────────────────

    def select_wire(self, system: WireSystem | str, value: str,
                    conductor_count: int) -> bool:
        """
        Commit wire system, size and conductor count, then look up the
        compatible contact sizes.  Raises QueryFailure if the lookup fails.
        """
        if not self._expect(Stage.WIRE_SELECTION, "select_wire"):
            return False
        system = WireSystem.coerce(system)
        value = str(value).strip() if value is not None else ""
        if not value:
            logger.info("select_wire ignored: no wire value")
            return False
        if int(conductor_count) < 1:
            logger.info(f"select_wire ignored: conductor count {conductor_count}")
            return False

        ticket = self._next_generation()
        try:
            sizes = self._query(
                "get_compatible_contact_sizes",
                self._reference.get_compatible_contact_sizes, value, system,
            )
        except QueryFailure as exc:
            self._record_failure(ticket, exc)
            raise

        selection = BuilderSelection(
            wire_system=system, wire_value=value,
            conductor_count=int(conductor_count),
        )
        return self._apply(
            ticket, "select_wire",
            stage=Stage.CONTACT_SIZE_SELECTION,
            selection=selection,
            candidates=Candidates(contact_sizes=tuple(sizes)),
        )

    # ── Step 2: contact size ───────────────────────────────────────────

    def select_contact_size(self, size: str) -> bool:
        """
        Commit a contact size (trusted to be one of candidates.contact_sizes)
        and fetch matching contacts and arrangements concurrently.
        """
        if not self._expect(Stage.CONTACT_SIZE_SELECTION, "select_contact_size"):
            return False
        size = str(size).strip()
        count = self._selection.conductor_count
        ref = self._reference

        ticket = self._next_generation()
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=2)
        try:
            f_contacts = executor.submit(
                self._query, "get_contacts_by_size",
                ref.get_contacts_by_size, size,
            )
            f_arrangements = executor.submit(
                self._query, "get_arrangements_by_contact_count",
                ref.get_arrangements_by_contact_count, count, size,
            )
            contacts = self._wait(f_contacts, "get_contacts_by_size")
            arrangements = self._wait(f_arrangements, "get_arrangements_by_contact_count")
        except QueryFailure as exc:
            self._record_failure(ticket, exc)
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        sizes = self._candidates.contact_sizes
        return self._apply(
            ticket, "select_contact_size",
            stage=Stage.CONTACT_SELECTION,
            selection=replace(self._selection, contact_size=size),
            candidates=Candidates(
                contact_sizes=sizes,
                contacts=tuple(contacts),
                arrangements=tuple(arrangements),
            ),
        )

    # ── Step 3: contacts ───────────────────────────────────────────────

    def toggle_contact(self, contact: Contact) -> bool:
        """Select the contact, or deselect it if already selected."""
        with self._lock:
            if self._stage is not Stage.CONTACT_SELECTION:
                self._log_wrong_stage("toggle_contact", Stage.CONTACT_SELECTION)
                return False
            self._selection = self._selection.toggle_contact(contact)
            return True

    def confirm_contacts(self) -> bool:
        """
        Caller decides the contact selection is complete.  Refused while no
        contact is selected, so the session stays editable.
        """
        with self._lock:
            if self._stage is not Stage.CONTACT_SELECTION:
                self._log_wrong_stage("confirm_contacts", Stage.CONTACT_SELECTION)
                return False
            if not self._selection.selected_contacts:
                logger.info("confirm_contacts ignored: no contact selected")
                return False
            self._stage = Stage.ARRANGEMENT_SELECTION
            return True

    # ── Steps 4-5: arrangement and shell style ─────────────────────────

    def select_arrangement(self, arrangement: str) -> bool:
        arrangement = str(arrangement or "").strip()
        if not arrangement:
            return False
        return self._advance(Stage.ARRANGEMENT_SELECTION, Stage.SHELL_STYLE_SELECTION,
                             "select_arrangement", arrangement=arrangement)

    def select_shell_style(self, shell_style: str) -> bool:
        """Shell style is a free-form vendor code; it is not checked."""
        shell_style = str(shell_style or "").strip()
        if not shell_style:
            return False
        return self._advance(Stage.SHELL_STYLE_SELECTION, Stage.SYNTHESIS,
                             "select_shell_style", shell_style=shell_style)

    # ── Step 6: synthesis ──────────────────────────────────────────────

    def build(self) -> Optional[BuilderResult]:
        """
        Synthesize the part number.  Returns None without changing state
        when shell style, arrangement or contacts are missing.
        """
        with self._lock:
            if self._stage is Stage.COMPLETE:
                return self._result

            sel = self._selection
            if not (sel.shell_style and sel.arrangement and sel.selected_contacts):
                logger.info("build skipped: selection incomplete")
                return None

            if len(sel.selected_contacts) > 1:
                logger.info(
                    f"{len(sel.selected_contacts)} contacts selected; "
                    f"{sel.selected_contacts[0].part_number} drives the part number"
                )

            self._result = synthesize(
                sel.shell_style, sel.arrangement, sel.selected_contacts,
                wire_value=sel.wire_value, wire_system=sel.wire_system,
            )
            self._stage = Stage.COMPLETE
            logger.info(f"Built {self._result.part_number}")
            return self._result

    # ── Reset ──────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Back to WIRE_SELECTION.  In-flight lookups become stale."""
        with self._lock:
            self._generation += 1
            self._set_initial()

    # ── Private helpers ────────────────────────────────────────────────

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _expect(self, stage: Stage, operation: str) -> bool:
        if self._stage is not stage:
            self._log_wrong_stage(operation, stage)
            return False
        return True

    def _log_wrong_stage(self, operation: str, expected: Stage) -> None:
        logger.warning(
            f"{operation} ignored: builder is at {self._stage.name}, "
            f"expected {expected.name}"
        )

    def _advance(self, current: Stage, nxt: Stage, operation: str, **changes) -> bool:
        with self._lock:
            if self._stage is not current:
                self._log_wrong_stage(operation, current)
                return False
            if changes:
                self._selection = replace(self._selection, **changes)
            self._stage = nxt
            return True

    def _apply(self, ticket: int, operation: str, *, stage: Stage,
               selection: BuilderSelection, candidates: Candidates) -> bool:
        with self._lock:
            if ticket != self._generation:
                logger.info(f"{operation}: discarding stale lookup result")
                return False
            self._selection = selection
            self._candidates = candidates
            self._stage = stage
            self._error = None
            return True

    def _record_failure(self, ticket: int, exc: QueryFailure) -> None:
        with self._lock:
            if ticket == self._generation:
                self._error = str(exc)

    @staticmethod
    def _query(operation: str, fn: Callable, *args) -> list:
        try:
            return list(fn(*args))
        except QueryFailure:
            raise
        except Exception as exc:
            logger.error(f"{operation} failed: {exc}")
            raise QueryFailure(operation, str(exc)) from exc

    def _wait(self, future: concurrent.futures.Future, operation: str) -> list:
        try:
            return future.result(timeout=self._query_timeout)
        except concurrent.futures.TimeoutError as exc:
            logger.error(f"{operation} timed out after {self._query_timeout}s")
            raise QueryFailure(operation, "timed out") from exc
