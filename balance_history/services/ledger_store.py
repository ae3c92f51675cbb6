"""
Record store for balance ledgers.

Loads a card's balance history rows into a BalanceLedger and
writes the changed dates back. The store flushes but never
commits; the caller owns the transaction boundary.
"""

import logging
import threading
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from balance_history.exceptions import AccountNotFound, PersistenceFailure
from balance_history.models.balance_history import BalanceHistoryEntry
from balance_history.models.credit_card import CreditCard
from balance_history.services.balance_ledger import BalanceLedger, BalanceRecord

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Find and persist ledgers by card number.

    Exclusive access is two-layered: a per-card lock for
    threads in this process, and a row lock on the card
    (SELECT ... FOR UPDATE) for other processes. Databases
    without row locks, such as SQLite, ignore the latter.

    Process locks are keyed by card id, so only cards that
    exist ever get one.
    """

    _locks: dict[int, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, db: Session):
        self.db = db
        self._cards: dict[str, CreditCard] = {}

    @classmethod
    def _lock_for(cls, card_id: int) -> threading.Lock:
        with cls._locks_guard:
            lock = cls._locks.get(card_id)
            if lock is None:
                lock = cls._locks[card_id] = threading.Lock()
            return lock

    def find_card_id(self, account_key: str) -> int | None:
        """Id of the card with this number, or None. Takes no locks."""
        return self.db.execute(
            select(CreditCard.id).where(CreditCard.number == account_key)
        ).scalar_one_or_none()

    @contextmanager
    def exclusive(self, card_id: int):
        """Hold the write lock for one card for the duration of the block."""
        with self._lock_for(card_id):
            yield

    def find_ledger_by_account_key(
        self, account_key: str, for_update: bool = False
    ) -> BalanceLedger | None:
        """Load the ledger for a card number, or None if there is no such card."""
        stmt = select(CreditCard).where(CreditCard.number == account_key)
        if for_update:
            stmt = stmt.with_for_update()
        card = self.db.execute(stmt).scalar_one_or_none()
        if card is None:
            return None

        self._cards[account_key] = card
        return BalanceLedger(
            account_key,
            (BalanceRecord(e.date, e.amount) for e in card.balance_entries),
        )

    def persist(self, ledger: BalanceLedger) -> None:
        """
        Write every record changed since the ledger was loaded.

        Existing rows are updated in place and new dates become
        new rows, all in a single flush. Raises PersistenceFailure
        if the database rejects it; the session must then be
        rolled back by the caller.
        """
        card = self._cards.get(ledger.account_key)
        if card is None:
            raise AccountNotFound(ledger.account_key)

        changed = ledger.changed_records()
        try:
            existing = {entry.date: entry for entry in card.balance_entries}
            for record in changed:
                entry = existing.get(record.date)
                if entry is None:
                    card.balance_entries.append(BalanceHistoryEntry(
                        date=record.date,
                        amount=record.amount,
                    ))
                else:
                    entry.amount = record.amount
            self.db.flush()
        except SQLAlchemyError as e:
            raise PersistenceFailure(ledger.account_key, e) from e

        ledger.mark_persisted()
        logger.debug(
            "Persisted %d balance records for %s", len(changed), ledger.account_key
        )
