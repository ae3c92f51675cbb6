"""
Retroactive balance corrections.

Balances are running totals: the balance stored for a day was
derived from the days before it. When a past day is corrected,
every later day up to today is shifted by the same delta.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from balance_history.services.balance_ledger import (
    BalanceLedger,
    ONE_DAY,
    ZERO,
    check_amount,
    check_date,
    iter_days,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrectionOutcome:
    """What a single correction did to its ledger."""

    account_key: str
    date: date
    previous_balance: Decimal
    new_balance: Decimal
    delta: Decimal
    days_propagated: int

    @property
    def propagated(self) -> bool:
        return self.days_propagated > 0


def apply_correction(
    ledger: BalanceLedger,
    on: date,
    new_amount: Decimal,
    today: date,
) -> CorrectionOutcome:
    """
    Set the balance for ``on`` and shift every later day up to ``today``.

    The delta is taken against the effective balance at ``on``
    before the correction. Propagation only runs when that
    balance was positive; a zero baseline (including a ledger
    with no earlier records) changes the corrected day only.

    Each day in ``on + 1 .. today`` ends up with an explicit
    record equal to its previous effective balance plus the
    delta, including days that previously inherited a balance.

    Everything happens in memory. Nothing is written to the
    ledger until both inputs have been validated.
    """
    check_date(on)
    check_date(today)
    new_amount = check_amount(new_amount)

    current = ledger.get_balance(on)
    delta = new_amount - current

    # Snapshot before writing: once ``on`` is rewritten, days
    # that fall back to it would read the corrected value.
    originals = iter(ledger.records_between(on + ONE_DAY, today))

    ledger.update_balance(on, new_amount)

    days_propagated = 0
    if current > ZERO:
        # A day without its own record carries the old effective
        # balance plus delta, never the rewritten day before it,
        # so the delta is applied to each day exactly once.
        carried = current
        pending = next(originals, None)
        for day in iter_days(on + ONE_DAY, today):
            if pending is not None and pending.date == day:
                carried = pending.amount
                pending = next(originals, None)
            ledger.update_balance(day, carried + delta)
            days_propagated += 1

    logger.debug(
        "Corrected %s on %s: %s -> %s (delta %s, %d days propagated)",
        ledger.account_key, on, current, new_amount, delta, days_propagated,
    )

    return CorrectionOutcome(
        account_key=ledger.account_key,
        date=on,
        previous_balance=current,
        new_balance=new_amount,
        delta=delta,
        days_propagated=days_propagated,
    )
