"""
Balance service: reads and corrects credit card balance history.

Reads load the card's ledger and answer from memory. Corrections
run one card at a time:

1. Look the card up, take its write lock and load its ledger
2. Apply the correction and its forward propagation in memory
3. Persist the changed records and an audit entry
4. Commit, then release the lock

Unlike the other services, corrections commit their own
transaction. A batch reports each item separately, and an item
that fails must not undo the items committed before it.
"""

import json
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from balance_history.config import get_settings
from balance_history.exceptions import (
    AccountNotFound,
    BalanceHistoryError,
    PersistenceFailure,
)
from balance_history.models.audit_log import AuditLog
from balance_history.models.enums import CorrectionStatus
from balance_history.schemas.balance import (
    BalanceCorrection,
    CorrectionItemResult,
)
from balance_history.services.balance_ledger import BalanceLedger
from balance_history.services.corrections import (
    CorrectionOutcome,
    apply_correction,
)
from balance_history.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

AUDIT_EVENT_CORRECTION = "BALANCE_CORRECTION"


class BalanceService:

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)
        self.settings = get_settings()

    # --- Reads ---

    def get_ledger(self, account_key: str) -> BalanceLedger:
        ledger = self.store.find_ledger_by_account_key(account_key)
        if ledger is None:
            raise AccountNotFound(account_key)
        return ledger

    def get_balance(self, account_key: str, on: date) -> Decimal:
        """Effective balance of a card as of a date."""
        return self.get_ledger(account_key).get_balance(on)

    def get_history(self, account_key: str) -> str:
        """The card's balance history as text, newest date first."""
        return self.get_ledger(account_key).serialize_history()

    # --- Corrections ---

    def apply_correction(
        self, request: BalanceCorrection, today: date | None = None
    ) -> CorrectionOutcome:
        """
        Apply and commit a single correction.

        Raises AccountNotFound if the card does not exist and
        PersistenceFailure if the database rejects the write.
        In both cases nothing is committed.
        """
        if today is None:
            today = date.today()

        card_id = self.store.find_card_id(request.account_key)
        if card_id is None:
            raise AccountNotFound(request.account_key)

        with self.store.exclusive(card_id):
            ledger = self.store.find_ledger_by_account_key(
                request.account_key, for_update=True
            )
            if ledger is None:
                # Deleted since the id lookup; release the row lock
                self.db.rollback()
                raise AccountNotFound(request.account_key)

            try:
                outcome = apply_correction(
                    ledger, request.date, request.amount, today
                )
                self.store.persist(ledger)
                self._audit(outcome)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise PersistenceFailure(request.account_key, e) from e
            except BalanceHistoryError:
                self.db.rollback()
                raise

        if outcome.days_propagated > self.settings.PROPAGATION_WARN_DAYS:
            logger.warning(
                "Correction for %s on %s propagated across %d days",
                outcome.account_key, outcome.date, outcome.days_propagated,
            )
        logger.info(
            "Applied correction for %s on %s: delta=%s, days_propagated=%d",
            outcome.account_key, outcome.date, outcome.delta,
            outcome.days_propagated,
        )
        return outcome

    def apply_corrections(
        self,
        requests: Iterable[BalanceCorrection],
        today: date | None = None,
    ) -> list[CorrectionItemResult]:
        """
        Apply corrections in order, reporting each item separately.

        A failed item is reported and skipped; processing goes on
        with the next one. Items already committed stay committed.
        Unless ``today`` is given, each item reads the current
        date when it is applied.
        """
        results = []
        for request in requests:
            try:
                outcome = self.apply_correction(request, today=today)
            except AccountNotFound as e:
                logger.warning("Skipping correction: %s", e)
                results.append(self._failed(request, e))
            except PersistenceFailure as e:
                logger.exception("Correction for %s not committed", request.account_key)
                results.append(self._failed(request, e))
            except BalanceHistoryError as e:
                logger.warning("Rejected correction for %s: %s", request.account_key, e)
                results.append(self._failed(request, e))
            else:
                results.append(CorrectionItemResult(
                    account_key=request.account_key,
                    date=request.date,
                    status=CorrectionStatus.OK,
                    previous_balance=outcome.previous_balance,
                    delta=outcome.delta,
                    days_propagated=outcome.days_propagated,
                ))
        return results

    # --- Helpers ---

    def _audit(self, outcome: CorrectionOutcome) -> None:
        self.db.add(AuditLog(
            event_type=AUDIT_EVENT_CORRECTION,
            account_key=outcome.account_key,
            details=json.dumps({
                "date": outcome.date.isoformat(),
                "previous_balance": str(outcome.previous_balance),
                "new_balance": str(outcome.new_balance),
                "delta": str(outcome.delta),
                "days_propagated": outcome.days_propagated,
            }),
        ))
        self.db.flush()

    @staticmethod
    def _failed(
        request: BalanceCorrection, error: BalanceHistoryError
    ) -> CorrectionItemResult:
        return CorrectionItemResult(
            account_key=request.account_key,
            date=request.date,
            status=CorrectionStatus.ERROR,
            reason=error.reason,
            detail=str(error),
        )
