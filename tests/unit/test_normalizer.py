from __future__ import annotations

import pytest

from showlog.models.diagnostic import RowDiagnostic
from showlog.models.show_record import ShowRecord
from showlog.services.normalizer import (
    DEFAULT_COLUMNS,
    GENRE_DELIMITERS,
    MissingColumnsError,
    coerce_bool,
    normalize_row,
    normalize_rows,
    resolve_columns,
    split_genres,
    to_number_or_null,
)

HEADER = ["Datum", "Nazev", "Soubor", "Misto", "Mesto", "Hostovacka", "StazenoZR", "Zanry", "Hodnoceni", "Komentar"]


def _row(date="2024-01-01", title="Hamlet", host="A", removed="N", genres="drama;tragedy", rating="92", comment="Great show"):
    return [date, title, "Troupe", "Theatre", "City", host, removed, genres, rating, comment]


@pytest.mark.parametrize("value", ["a", "A", "y", "Yes", "yes", "TRUE", "true", "1", "  a  "])
def test_coerce_bool_truthy(value):
    assert coerce_bool(value) is True


@pytest.mark.parametrize("value", ["n", "N", "", "maybe", "0", "no", "false", "ano", None])
def test_coerce_bool_falsy(value):
    assert coerce_bool(value) is False


def test_split_genres_order_case_and_trim():
    assert split_genres("Drama; comedy,Site Specific") == ["drama", "comedy", "site specific"]


def test_split_genres_empty():
    assert split_genres("") == []
    assert split_genres("   ") == []
    assert split_genres(None) == []


def test_split_genres_mixed_delimiters_and_empty_tokens():
    assert split_genres("a|b;;c, ,|") == ["a", "b", "c"]


def test_split_genres_keeps_duplicates():
    assert split_genres("Drama;drama|DRAMA") == ["drama", "drama", "drama"]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("85", 85),
        ("85%", 85),
        (" 85 % ", 85),
        ("72.5", 72.5),
        ("85.0", 85),
        ("-3", -3),
        ("150", 150),  # not clamped
        ("1e2", 100),
        (".5", 0.5),
    ],
)
def test_to_number_or_null_numbers(value, expected):
    result = to_number_or_null(value)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("value", ["", "   ", "%", "n/a", "abc", "inf", "nan", "1,5", "1e999", None])
def test_to_number_or_null_invalid(value):
    assert to_number_or_null(value) is None


def test_resolve_columns_any_order_and_extra_columns():
    header = ["Extra"] + list(reversed(HEADER))
    index = resolve_columns(header)
    assert index.positions["date"] == len(HEADER)
    assert index.positions["comment"] == 1


def test_resolve_columns_trims_header_names():
    index = resolve_columns([f" {h} " for h in HEADER])
    assert index.positions["title"] == 1


def test_resolve_columns_missing_lists_all_missing():
    header = [h for h in HEADER if h not in ("Nazev", "Hodnoceni")]
    with pytest.raises(MissingColumnsError) as e:
        resolve_columns(header)
    assert e.value.missing == ["Nazev", "Hodnoceni"]
    assert "Nazev, Hodnoceni" in str(e.value)
    assert "Datum | Soubor" in str(e.value)


def test_resolve_columns_custom_names():
    columns = dict(DEFAULT_COLUMNS, date="Date", title="Title")
    header = ["Date", "Title"] + HEADER[2:]
    index = resolve_columns(header, columns)
    assert index.positions["date"] == 0
    assert index.names["title"] == "Title"


def test_normalize_row_end_to_end_example():
    index = resolve_columns(HEADER)
    record = normalize_row(_row(), index, 2)
    assert record == ShowRecord(
        date="2024-01-01",
        title="Hamlet",
        theatre="Troupe",
        place="Theatre",
        city="City",
        host=True,
        removed=False,
        genres=["drama", "tragedy"],
        rating=92,
        comment="Great show",
    )


def test_normalize_row_trims_cells():
    index = resolve_columns(HEADER)
    record = normalize_row(["  2024-01-01 ", " Hamlet", " T ", "", "", "", "", "", "", "  ok "], index, 2)
    assert isinstance(record, ShowRecord)
    assert record.date == "2024-01-01"
    assert record.title == "Hamlet"
    assert record.theatre == "T"
    assert record.comment == "ok"


def test_normalize_row_short_row_defaults():
    index = resolve_columns(HEADER)
    record = normalize_row(["2024-01-01", "Hamlet"], index, 2)
    assert record == ShowRecord(date="2024-01-01", title="Hamlet")
    assert record.genres == []
    assert record.rating is None
    assert record.host is False


@pytest.mark.parametrize("date,title", [("", "Hamlet"), ("2024-01-01", ""), ("  ", "  "), ("", "")])
def test_normalize_row_missing_required_field(date, title):
    index = resolve_columns(HEADER)
    outcome = normalize_row(_row(date=date, title=title), index, 7)
    assert outcome == RowDiagnostic(row=7, reason="missing Datum or Nazev -> skipped")
    assert str(outcome) == "Row 7: missing Datum or Nazev -> skipped"


def test_normalize_rows_skips_and_keeps_order():
    rows = [
        _row(title="First"),
        _row(title=""),
        _row(title="Third"),
        _row(date=""),
        _row(title="Fifth"),
    ]
    result = normalize_rows(HEADER, rows)
    assert [r.title for r in result.records] == ["First", "Third", "Fifth"]
    assert [d.row for d in result.diagnostics] == [3, 5]


def test_normalize_rows_missing_column_fails_before_rows():
    header = [h for h in HEADER if h != "Komentar"]
    with pytest.raises(MissingColumnsError):
        # rows would otherwise produce diagnostics; header check comes first
        normalize_rows(header, [_row(title="")])


def test_normalize_rows_does_not_mutate_inputs():
    header = list(HEADER)
    rows = [_row(), _row(title="")]
    snapshot = [list(r) for r in rows]
    normalize_rows(header, rows)
    assert header == HEADER
    assert rows == snapshot


def test_normalize_rows_is_deterministic():
    rows = [_row(), _row(genres="a|b"), _row(date="")]
    assert normalize_rows(HEADER, rows) == normalize_rows(HEADER, rows)


def test_value_level_problems_do_not_skip_row():
    result = normalize_rows(HEADER, [_row(host="maybe", genres=";;", rating="n/a")])
    assert len(result.records) == 1
    assert result.diagnostics == []
    rec = result.records[0]
    assert rec.host is False
    assert rec.genres == []
    assert rec.rating is None


def test_to_number_or_null_huge_integral_stays_float():
    result = to_number_or_null("1e300")
    assert result == 1e300
    assert isinstance(result, float)
    assert to_number_or_null(str(2**53 - 1)) == 2**53 - 1
    assert isinstance(to_number_or_null(str(2**53 - 1)), int)


def test_split_genres_uses_each_delimiter():
    for delim in GENRE_DELIMITERS:
        assert split_genres(f"A{delim}B") == ["a", "b"]


def test_partial_columns_merge_over_defaults():
    header = ["Date", "Title"] + HEADER[2:]
    result = normalize_rows(header, [_row()], {"date": "Date", "title": "Title"})
    assert [r.title for r in result.records] == ["Hamlet"]
    assert result.records[0].theatre == "Troupe"


def test_partial_columns_with_default_names():
    result = normalize_rows(HEADER, [_row()], {"date": "Datum", "title": "Nazev"})
    assert result.records[0].rating == 92
