"""Tests for the summary/description text encoding of bookings."""

from bookings.event_format import (
    decode_phone,
    decode_summary,
    encode_description,
    encode_summary,
)


class TestSummary:
    def test_format(self):
        assert encode_summary("Asha", "Haircut") == "Booking: Asha - Haircut"

    def test_round_trip(self):
        assert decode_summary(encode_summary("Asha Rao", "Hair Spa")) == ("Asha Rao", "Hair Spa")

    def test_name_containing_separator(self):
        summary = encode_summary("Mary - Jane", "Facial")
        assert decode_summary(summary) == ("Mary - Jane", "Facial")

    def test_foreign_summary(self):
        assert decode_summary("Team lunch") == ("Team lunch", None)

    def test_prefix_without_separator(self):
        assert decode_summary("Booking: Walk-in") == ("Walk-in", None)


class TestDescription:
    def test_format(self):
        assert encode_description("+91 98765 43210") == "Phone: +91 98765 43210"

    def test_round_trip(self):
        assert decode_phone(encode_description("555-0100")) == "555-0100"

    def test_multiline_description(self):
        assert decode_phone("Phone: 555-0100\nService: Haircut") == "555-0100"

    def test_missing(self):
        assert decode_phone("") is None
        assert decode_phone("No phone here") is None
