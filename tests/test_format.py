"""Unit tests for term formatting."""

import datetime as dt

from arcgis_rest_portal._impl._format import (
    format_range,
    format_term,
    format_terms,
    needs_quotes,
    to_epoch_ms,
)


class TestEpoch:
    def test_naive_date_is_utc(self) -> None:
        assert to_epoch_ms(dt.date(2020, 1, 1)) == 1577836800000

    def test_naive_datetime_is_utc(self) -> None:
        assert to_epoch_ms(dt.datetime(2020, 9, 1)) == 1598918400000

    def test_aware_datetime_uses_its_offset(self) -> None:
        plus_one = dt.timezone(dt.timedelta(hours=1))
        assert to_epoch_ms(dt.datetime(2020, 1, 1, 1, tzinfo=plus_one)) == 1577836800000

    def test_milliseconds_are_kept(self) -> None:
        value = dt.datetime(2020, 1, 1, 0, 0, 1, 250000, tzinfo=dt.timezone.utc)
        assert to_epoch_ms(value) == 1577836801250

    def test_epoch_itself(self) -> None:
        assert to_epoch_ms(dt.date(1970, 1, 1)) == 0

    def test_before_epoch(self) -> None:
        assert to_epoch_ms(dt.date(1969, 12, 31)) == -86400000

    def test_single_millisecond(self) -> None:
        value = dt.datetime(2020, 1, 1, 0, 0, 0, 1000, tzinfo=dt.timezone.utc)
        assert to_epoch_ms(value) == 1577836800001

    def test_fraction_before_epoch(self) -> None:
        value = dt.datetime(1969, 12, 31, 23, 59, 59, 500000)
        assert to_epoch_ms(value) == -500


class TestNeedsQuotes:
    def test_space(self) -> None:
        assert needs_quotes("Demo App") is True

    def test_tab_and_newline(self) -> None:
        assert needs_quotes("a\tb") is True
        assert needs_quotes("a\nb") is True

    def test_colon(self) -> None:
        assert needs_quotes("owner:casey") is True

    def test_plain_word(self) -> None:
        assert needs_quotes("Lakes") is False

    def test_empty_string(self) -> None:
        assert needs_quotes("") is False


class TestFormatTerm:
    def test_date_renders_as_integer(self) -> None:
        assert format_term(dt.date(2020, 1, 1)) == "1577836800000"

    def test_datetime_never_renders_as_date_string(self) -> None:
        out = format_term(dt.datetime(2020, 1, 1, 12, 30))
        assert out.isdigit()

    def test_quotes_phrase(self) -> None:
        assert format_term("Web Mapping Application") == '"Web Mapping Application"'

    def test_plain_string_unquoted(self) -> None:
        assert format_term("Application") == "Application"

    def test_numbers_pass_through(self) -> None:
        assert format_term(42) == "42"
        assert format_term(1.5) == "1.5"

    def test_whole_float_drops_fraction(self) -> None:
        assert format_term(2.0) == "2"
        assert format_range(0.0, 10.0) == "[0 TO 10]"

    def test_bools_are_lowercase(self) -> None:
        assert format_term(True) == "true"
        assert format_term(False) == "false"

    def test_terms_join_with_single_space(self) -> None:
        assert format_terms(["a", "b c", 3]) == 'a "b c" 3'

    def test_range(self) -> None:
        assert format_range(dt.date(2020, 1, 1), 5) == "[1577836800000 TO 5]"
