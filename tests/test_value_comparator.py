from tablesorter.domain.models import ColumnType
from tablesorter.services.type_resolver import resolve_type
from tablesorter.services.value_comparator import (
    compare,
    compare_text,
    parse_date,
    parse_date_with_format,
    parse_number,
)


def test_numeric_order_not_lexicographic():
    assert compare("10", "9", ColumnType.NUMBER) > 0
    assert compare("9", "10", ColumnType.NUMBER) < 0
    assert compare("2.50", "2.5", ColumnType.NUMBER) == 0
    assert compare("-3", "1e1", ColumnType.NUMBER) < 0


def test_number_falls_back_to_text():
    assert compare("abc", "9", ColumnType.NUMBER) == compare_text("abc", "9")
    assert compare("abc", "9", ColumnType.NUMBER) > 0


def test_values_are_trimmed_and_none_is_empty():
    assert compare("  7 ", "7", ColumnType.NUMBER) == 0
    assert compare(None, "", ColumnType.TEXT) == 0
    assert compare(None, "a", ColumnType.TEXT) < 0


def test_text_is_case_insensitive_first():
    assert compare("apple", "Banana", ColumnType.TEXT) < 0
    assert compare("Banana", "apple", ColumnType.TEXT) > 0
    assert compare("same", "same", ColumnType.TEXT) == 0
    # identical ignoring case still yields a deterministic order
    assert compare("a", "A", ColumnType.TEXT) == -compare("A", "a", ColumnType.TEXT) != 0


def test_date_with_explicit_format():
    fmt = "DD/MM/YYYY"
    assert compare("01/02/2023", "03/02/2023", ColumnType.DATE, fmt) < 0
    # day-first format: 12/01 (12 Jan) is before 01/02 (1 Feb)
    assert compare("12/01/2023", "01/02/2023", ColumnType.DATE, fmt) < 0


def test_two_digit_year_pivot():
    fmt = "DD.MM.YY"
    # 69 -> 2069, 70 -> 1970
    assert compare("01.01.69", "01.01.70", ColumnType.DATE, fmt) > 0
    assert parse_date_with_format("01.01.05", fmt) > parse_date_with_format("31.12.99", fmt)


def test_format_defaults_missing_parts():
    # No year in the format: both default to the same year, month/day decide
    assert compare("03-15", "02-28", ColumnType.DATE, "MM-DD") > 0
    assert parse_date_with_format("02-29", "MM-DD") is not None


def test_format_token_mismatch_falls_back_to_general_parse():
    # value has three numeric tokens, format only two -> general parse of ISO dates
    assert parse_date_with_format("2023-01-05", "MM/YYYY") is None
    assert compare("2023-01-05", "2022-12-31", ColumnType.DATE, "MM/YYYY") > 0


def test_general_date_parse():
    assert parse_date("2023-01-05") is not None
    assert parse_date("2023-01-05T10:00:00Z") is not None
    assert parse_date("March 7, 2023") is not None
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert compare("2023-01-05", "March 7, 2023", ColumnType.DATE) < 0


def test_invalid_date_falls_back_to_text():
    assert compare("zzz", "2023-01-01", ColumnType.DATE) == compare_text("zzz", "2023-01-01")
    assert compare("31/02/2023", "31/02/2023", ColumnType.DATE, "DD/MM/YYYY") == 0


def test_parse_number_reads_leading_decimal():
    assert parse_number("42") == 42.0
    assert parse_number(" -0.5 ") == -0.5
    assert parse_number(".5") == 0.5
    assert parse_number("10 km") == 10.0
    assert parse_number("5%") == 5.0
    assert parse_number("1e") == 1.0
    assert parse_number("2023-01-05") is None
    assert parse_number("12:30") is None
    assert parse_number("1.5.3") is None
    assert parse_number("km 10") is None
    assert parse_number("") is None
    assert parse_number(None) is None
    assert parse_number("nan") is None


def test_compare_never_raises_on_garbage():
    samples = ["", "  ", "\x00", "1/2/3/4", "99/99/9999", "--", "1e", "२३", None]
    for a in samples:
        for b in samples:
            for t in ColumnType:
                result = compare(a, b, t, "DD/MM/YYYY")
                assert result in (-1, 0, 1)


def test_units_and_percentages_sort_numerically():
    assert compare("10%", "5%", ColumnType.NUMBER) > 0
    assert compare("9 km", "10 km", ColumnType.NUMBER) < 0
    assert resolve_type(None, "10%", "5%") is ColumnType.NUMBER
    assert resolve_type(None, "2023-01-05", "2023-02-01") is ColumnType.DATE


def test_general_parse_accepts_basic_iso_forms():
    assert parse_date("20230105") == parse_date("2023-01-05")
    assert parse_date("2023-01-05 10:00") < parse_date("2023-01-05T11:00:00")
