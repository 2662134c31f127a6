import pytest

from namepool.ingest.record_parser import (
    RecordParser,
    parse_float_prefix,
    parse_int_prefix,
    parse_participation_field,
    split_lines,
)


@pytest.fixture
def parser():
    return RecordParser()


def test_parses_reference_row(parser):
    row = parser.parse_line("m1,School1,Zhang,2021,90,88.5,1:1:88.5:1:0:0")
    assert len(row.parts) == 7
    assert row.name == "Zhang"
    assert row.score == 88.5
    assert [(f.match_id, f.region_id) for f in row.facts] == [(1, 0)]


def test_name_falls_back_to_field_one(parser):
    row = parser.parse_line("m1,School1, ,2021,90,88.5,1:1:88.5:1:0:0")
    assert row.name == "School1"


def test_name_missing_everywhere(parser):
    row = parser.parse_line("m1,,,2021,90,88.5,1:1:88.5:1:0:0")
    assert row.name is None


def test_score_field_order(parser):
    assert parser.parse_line("a,b,c,30,40,50,60,1:1:1:1:1").score == 50
    assert parser.parse_line("a,b,c,30,40,x,60,1:1:1:1:1").score == 40
    assert parser.parse_line("a,b,c,30,x,x,60,1:1:1:1:1").score == 60
    assert parser.parse_line("a,b,c,30,x,x,x,1:1:1:1:1").score == 30


def test_score_missing(parser):
    row = parser.parse_line("a,b,c,x,y,z,w,1:1:1:1:1")
    assert row is not None
    assert row.score is None


def test_short_row_reads_score_from_participation_field(parser):
    # Only field 3 is in range, and it is the participation string itself
    row = parser.parse_line("a,b,c,7:2:3:4:5")
    assert row.score == 7.0


def test_row_without_facts_is_dropped(parser):
    assert parser.parse_line("a,b,c,1,2,3,x:1:1:1:1") is None
    assert parser.parse_line("a,b,c,1,2,3,") is None


def test_participation_segments():
    facts = parse_participation_field("12:1:80:3:4:0/bad:1:1:1:1/13:2:70/14:1:1:1:x")
    assert [(f.match_id, f.region_id) for f in facts] == [(12, 4), (13, None), (14, None)]


def test_participation_tolerates_trailing_garbage():
    facts = parse_participation_field("12abc:1:1:1:3z")
    assert [(f.match_id, f.region_id) for f in facts] == [(12, 3)]


def test_participation_empty():
    assert parse_participation_field("") == []
    assert parse_participation_field(None) == []


def test_number_prefixes():
    assert parse_int_prefix(" -4x") == -4
    assert parse_int_prefix("x4") is None
    assert parse_float_prefix("88.5pts") == 88.5
    assert parse_float_prefix(".5") == 0.5
    assert parse_float_prefix("1e3") == 1000.0
    assert parse_float_prefix("1e999") is None
    assert parse_float_prefix("abc") is None
    assert parse_float_prefix("") is None


def test_split_lines():
    assert split_lines("a\r\n\n  b  \r\n   \nc") == ["a", "b", "c"]


def test_custom_field_orders():
    parser = RecordParser(name_fields=(0,), score_fields=(1,))
    row = parser.parse_line("Li,77,x,1:1:1:1:2")
    assert row.name == "Li"
    assert row.score == 77


def test_number_prefixes_accept_ascii_digits_only():
    assert parse_int_prefix("３") is None
    assert parse_int_prefix("٣") is None
    assert parse_float_prefix("８８.５") is None
    assert parse_float_prefix("1２") == 1.0


def test_full_width_digits_are_not_numbers(parser):
    row = parser.parse_line("a,b,c,９０,８０,８８.５,１:1:1:1:1/2:3:1:1:1")
    assert row.score is None
    assert [(f.match_id, f.region_id) for f in row.facts] == [(2, 1)]
    assert parser.parse_line("a,b,c,1,2,3,１:1:1:1:1") is None
