"""
Tests for the in-memory BalanceLedger.

Tests cover:
- Effective balance lookup (exact, nearest earlier, none)
- Insert and update overwrite semantics
- Descending history order and text formatting
- Change tracking used by the record store
- Input validation
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from balance_history.exceptions import InvalidAmount, InvalidDate
from balance_history.services.balance_ledger import (
    BalanceLedger,
    BalanceRecord,
    format_amount,
    iter_days,
)


def make_ledger(*pairs):
    """Build a ledger from (iso_date, amount) pairs."""
    return BalanceLedger("4111111111111111", [
        BalanceRecord(date.fromisoformat(d), Decimal(a)) for d, a in pairs
    ])


class TestGetBalance:

    def test_empty_ledger_is_zero(self):
        ledger = make_ledger()
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("0")

    def test_exact_date(self):
        ledger = make_ledger(("2024-05-01", "100"))
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("100")

    def test_falls_back_to_nearest_earlier_record(self):
        ledger = make_ledger(("2024-05-01", "100"))
        assert ledger.get_balance(date(2024, 5, 2)) == Decimal("100")

    def test_nearest_prior_is_not_interpolated(self):
        ledger = make_ledger(("2024-05-01", "100"), ("2024-05-03", "200"))
        assert ledger.get_balance(date(2024, 5, 2)) == Decimal("100")
        assert ledger.get_balance(date(2024, 5, 3)) == Decimal("200")
        assert ledger.get_balance(date(2024, 6, 30)) == Decimal("200")

    def test_before_first_record_is_zero(self):
        ledger = make_ledger(("2024-05-01", "100"))
        assert ledger.get_balance(date(2024, 4, 30)) == Decimal("0")

    def test_matches_latest_record_on_or_before(self):
        pairs = [
            ("2023-04-10", "800"),
            ("2023-04-11", "1000"),
            ("2023-04-13", "1100"),
            ("2023-04-16", "900"),
        ]
        ledger = make_ledger(*pairs)
        records = [(date.fromisoformat(d), Decimal(a)) for d, a in pairs]

        for day in iter_days(date(2023, 4, 8), date(2023, 4, 18)):
            earlier = [amount for d, amount in records if d <= day]
            expected = earlier[-1] if earlier else Decimal("0")
            assert ledger.get_balance(day) == expected


class TestWrites:

    def test_insert_then_read(self):
        ledger = make_ledger()
        ledger.insert_balance(date(2024, 5, 1), Decimal("100"))
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("100")
        assert ledger.get_balance(date(2024, 5, 2)) == Decimal("100")

    def test_insert_existing_date_overwrites(self):
        ledger = make_ledger(("2024-05-01", "100"))
        ledger.insert_balance(date(2024, 5, 1), Decimal("250"))

        assert len(ledger) == 1
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("250")

    def test_update_existing_date(self):
        ledger = make_ledger(("2024-05-01", "100"))
        ledger.update_balance(date(2024, 5, 1), Decimal("200"))

        assert len(ledger) == 1
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("200")

    def test_update_new_date_inserts(self):
        ledger = make_ledger(("2024-05-01", "100"))
        ledger.update_balance(date(2024, 5, 3), Decimal("300"))

        assert len(ledger) == 2
        assert date(2024, 5, 3) in ledger
        assert ledger.get_balance(date(2024, 5, 3)) == Decimal("300")

    def test_update_does_not_touch_later_dates(self):
        ledger = make_ledger(("2024-05-01", "100"), ("2024-05-05", "300"))
        ledger.update_balance(date(2024, 5, 1), Decimal("150"))

        assert ledger.get_balance(date(2024, 5, 4)) == Decimal("150")
        assert ledger.get_balance(date(2024, 5, 5)) == Decimal("300")
        assert len(ledger) == 2

    def test_negative_amounts_allowed(self):
        ledger = make_ledger()
        ledger.insert_balance(date(2024, 5, 1), Decimal("-42.50"))
        assert ledger.get_balance(date(2024, 5, 2)) == Decimal("-42.50")


class TestHistory:

    def test_records_newest_first(self):
        ledger = make_ledger()
        for d, a in [
            ("2023-04-12", "1200"),
            ("2023-04-10", "800"),
            ("2023-04-16", "900"),
            ("2023-04-11", "1000"),
        ]:
            ledger.insert_balance(date.fromisoformat(d), Decimal(a))

        dates = [r.date for r in ledger.records()]
        assert dates == sorted(dates, reverse=True)
        assert len(set(dates)) == len(dates)

    def test_serialize_history(self):
        ledger = make_ledger(
            ("2024-05-01", "100"),
            ("2024-05-03", "200.50"),
            ("2024-05-02", "-20.2500"),
        )
        assert ledger.serialize_history() == (
            "2024-05-03: 200.5\n"
            "2024-05-02: -20.25\n"
            "2024-05-01: 100\n"
        )

    def test_serialize_empty_ledger(self):
        assert make_ledger().serialize_history() == ""

    def test_records_between_is_inclusive_and_ascending(self):
        ledger = make_ledger(
            ("2024-05-01", "1"),
            ("2024-05-03", "3"),
            ("2024-05-05", "5"),
            ("2024-05-07", "7"),
        )
        records = ledger.records_between(date(2024, 5, 3), date(2024, 5, 5))
        assert [r.date.day for r in records] == [3, 5]

    @pytest.mark.parametrize("amount, text", [
        ("100.0000", "100"),
        ("0.0000", "0"),
        ("150.5", "150.5"),
        ("1E+3", "1000"),
    ])
    def test_format_amount(self, amount, text):
        assert format_amount(Decimal(amount)) == text


class TestChangeTracking:

    def test_loaded_records_are_not_changes(self):
        ledger = make_ledger(("2024-05-01", "100"))
        assert ledger.changed_records() == []

    def test_writes_are_tracked_until_persisted(self):
        ledger = make_ledger(("2024-05-01", "100"))
        ledger.update_balance(date(2024, 5, 3), Decimal("5"))
        ledger.update_balance(date(2024, 5, 1), Decimal("7"))

        changed = ledger.changed_records()
        assert [r.date for r in changed] == [date(2024, 5, 1), date(2024, 5, 3)]

        ledger.mark_persisted()
        assert ledger.changed_records() == []


class TestValidation:

    def test_string_date_rejected(self):
        ledger = make_ledger()
        with pytest.raises(InvalidDate):
            ledger.insert_balance("2024-05-01", Decimal("1"))
        assert len(ledger) == 0

    def test_datetime_rejected(self):
        with pytest.raises(InvalidDate):
            make_ledger().get_balance(datetime(2024, 5, 1, 12, 0))

    def test_float_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            make_ledger().insert_balance(date(2024, 5, 1), 1.5)

    def test_nan_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            make_ledger().update_balance(date(2024, 5, 1), Decimal("NaN"))

    def test_integer_amount_accepted(self):
        ledger = make_ledger()
        ledger.insert_balance(date(2024, 5, 1), 100)
        assert ledger.get_balance(date(2024, 5, 1)) == Decimal("100")

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            make_ledger().insert_balance(date(2024, 5, 1), "ten")
