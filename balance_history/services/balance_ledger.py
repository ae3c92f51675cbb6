"""
In-memory balance ledger for one credit card.

The ledger is an ordered map from calendar date to balance.
Dates are kept in a sorted list next to a dict of amounts, so
a point read is a binary search and a range of dates is a
slice. Records are sparse: a date without a record inherits
the balance of the closest earlier record, and a date with no
earlier record has a balance of zero.

The ledger knows nothing about the database. The record store
builds one from stored rows and writes back the dates that
changed.
"""

from bisect import bisect_left, bisect_right, insort
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Iterator

from balance_history.exceptions import InvalidAmount, InvalidDate

ZERO = Decimal("0")
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class BalanceRecord:
    """A stored balance for one date."""

    date: date
    amount: Decimal

    def __str__(self) -> str:
        return f"{self.date.isoformat()}: {format_amount(self.amount)}"


def format_amount(amount: Decimal) -> str:
    """Render an amount as a plain decimal without trailing zeros."""
    text = format(amount.normalize(), "f")
    return "0" if text == "-0" else text


def check_date(value) -> date:
    # datetime is a subclass of date; a timestamp is not a calendar day
    if not isinstance(value, date) or isinstance(value, datetime):
        raise InvalidDate(f"Expected a calendar date, got {value!r}")
    return value


def check_amount(value) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise InvalidAmount(f"Expected a decimal amount, got {value!r}")
    amount = Decimal(value)
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    return amount


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


class BalanceLedger:

    def __init__(
        self,
        account_key: str,
        records: Iterable[BalanceRecord] = (),
    ):
        self.account_key = account_key
        self._dates: list[date] = []
        self._amounts: dict[date, Decimal] = {}
        self._changed: set[date] = set()

        for record in records:
            self._write(check_date(record.date), check_amount(record.amount))
        # Loaded records are the baseline, not pending changes
        self._changed.clear()

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, day: date) -> bool:
        return day in self._amounts

    def __repr__(self) -> str:
        return f"<BalanceLedger {self.account_key} ({len(self)} records)>"

    # --- Reads ---

    def get_balance(self, day: date) -> Decimal:
        """
        Return the effective balance as of ``day``.

        That is the amount recorded for ``day`` if there is one,
        otherwise the amount of the latest record before it,
        otherwise zero. An empty ledger is a valid zero balance,
        so this never raises for a well-formed date.
        """
        check_date(day)
        index = bisect_right(self._dates, day)
        if index == 0:
            return ZERO
        return self._amounts[self._dates[index - 1]]

    def records(self) -> list[BalanceRecord]:
        """All records, most recent date first."""
        return [
            BalanceRecord(day, self._amounts[day])
            for day in reversed(self._dates)
        ]

    def records_between(self, start: date, end: date) -> list[BalanceRecord]:
        """Records dated within [start, end], oldest first."""
        low = bisect_left(self._dates, start)
        high = bisect_right(self._dates, end)
        return [
            BalanceRecord(day, self._amounts[day])
            for day in self._dates[low:high]
        ]

    def serialize_history(self) -> str:
        """One ``<date>: <amount>`` line per record, newest first."""
        return "".join(f"{record}\n" for record in self.records())

    # --- Writes ---

    def insert_balance(self, day: date, amount: Decimal) -> None:
        """Write a record for ``day``, replacing any existing one."""
        self._write(check_date(day), check_amount(amount))

    def update_balance(self, day: date, amount: Decimal) -> None:
        """
        Overwrite the record for ``day`` in place, or insert it.

        Later dates are left alone; forward propagation belongs
        to apply_correction.
        """
        self._write(check_date(day), check_amount(amount))

    def _write(self, day: date, amount: Decimal) -> None:
        if day not in self._amounts:
            insort(self._dates, day)
        self._amounts[day] = amount
        self._changed.add(day)

    # --- Change tracking for the record store ---

    def changed_records(self) -> list[BalanceRecord]:
        """Records written since load or the last persist, oldest first."""
        return [
            BalanceRecord(day, self._amounts[day])
            for day in sorted(self._changed)
        ]

    def mark_persisted(self) -> None:
        self._changed.clear()
