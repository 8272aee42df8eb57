"""Tests for shared address helpers and record types."""

from dexscout.types import (
    EMPTY_RESERVES,
    ZERO_ADDRESS,
    PairRecord,
    Reserves,
    address_lt,
    is_zero_address,
    unique_pairs,
)

LOW = "0x" + "11" * 20
HIGH = "0x" + "EE" * 20


class TestAddressHelpers:
    """Zero detection and numeric ordering."""

    def test_zero_address(self):
        assert is_zero_address(ZERO_ADDRESS)
        assert is_zero_address(None)
        assert not is_zero_address(LOW)

    def test_ordering_ignores_case(self):
        assert address_lt(LOW, HIGH)
        assert address_lt(LOW, HIGH.lower())
        assert not address_lt(HIGH, LOW)


class TestRecords:
    """Record helpers."""

    def test_empty_reserves(self):
        assert EMPTY_RESERVES.is_empty
        assert Reserves(0, 10).is_empty
        assert not Reserves(1, 10).is_empty

    def test_unique_pairs_keeps_first_seen(self):
        first = PairRecord(LOW, HIGH, "0x" + "aa" * 20)
        second = PairRecord(LOW, HIGH, "0x" + "bb" * 20)
        duplicate = PairRecord(LOW, HIGH, "0x" + "AA" * 20)

        assert unique_pairs([first, second, duplicate]) == [first, second]
