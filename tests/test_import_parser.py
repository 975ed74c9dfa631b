"""Unit tests for the free-text import parser."""

import pytest

from tabiplan.api.import_parser import ImportParser, normalize_time
from tabiplan.api.models import ItineraryItem
from tabiplan.api.prompts import render_itinerary


@pytest.fixture
def parser():
    return ImportParser(batch_id_factory=lambda: "batch")


def parsed(parser, text):
    return [(item.time, item.activity) for item in parser.parse(text)]


def test_bulleted_line(parser):
    assert parsed(parser, "- 09:40 自宅を出る") == [("09:40", "自宅を出る")]


def test_range_end_is_stripped(parser):
    assert parsed(parser, "11:55〜12:14 北ノ麺 もりうち") == [("11:55", "北ノ麺 もりうち")]


@pytest.mark.parametrize("connector", ["~", "-", "〜"])
def test_range_connectors(parser, connector):
    line = f"- 13:29 {connector} 13:36 弁天橋駅"
    assert parsed(parser, line) == [("13:29", "弁天橋駅")]


def test_time_only_line_is_discarded(parser):
    assert parser.parse("10:00") == []


def test_line_without_time_is_discarded(parser):
    assert parser.parse("no time here") == []


def test_blank_input(parser):
    assert parser.parse("") == []
    assert parser.parse("   \n  ") == []


def test_mixed_lines_keep_source_order(parser):
    text = "- 14:18 鶴見川 散策\nお昼はどこかで\n- 10:00 石神井公園駅 発"

    assert parsed(parser, text) == [
        ("14:18", "鶴見川 散策"),
        ("10:00", "石神井公園駅 発"),
    ]


def test_single_digit_hour_is_padded(parser):
    assert parsed(parser, "9:00 出発") == [("09:00", "出発")]


def test_unconnected_second_time_stays_in_activity(parser):
    assert parsed(parser, "10:00 集合 11:00 解散") == [("10:00", "集合 11:00 解散")]


def test_time_not_at_line_start_keeps_whole_line(parser):
    assert parsed(parser, "集合 10:00 駅前") == [("10:00", "集合 10:00 駅前")]


def test_inner_dash_is_kept(parser):
    assert parsed(parser, "- 10:00 東京 - 横浜") == [("10:00", "東京 - 横浜")]


def test_full_width_space_after_bullet(parser):
    assert parsed(parser, "-　09:40 自宅を出る") == [("09:40", "自宅を出る")]


def test_full_width_spaces_around_range(parser):
    assert parsed(parser, "11:55　〜　12:14 北ノ麺") == [("11:55", "北ノ麺")]


def test_full_width_space_inside_activity_is_kept(parser):
    assert parsed(parser, "- 11:55 北ノ麺　もりうち") == [("11:55", "北ノ麺　もりうち")]


def test_colon_after_time_is_dropped(parser):
    assert parsed(parser, "10:00 :) 集合") == [("10:00", ") 集合")]


def test_full_width_digits_are_not_times(parser):
    assert parser.parse("１０:００ 出発") == []


def test_ids_are_unique_per_line(parser):
    items = parser.parse("09:00 A\nskip\n10:00 B")
    assert [item.id for item in items] == ["batch-0", "batch-2"]
    assert all(item.url is None for item in items)


def test_default_batch_ids_differ_between_calls():
    parser = ImportParser()
    first = parser.parse("09:00 A")[0]
    second = parser.parse("09:00 A")[0]
    assert first.id != second.id


def test_crlf_lines(parser):
    assert parsed(parser, "09:00 A\r\n10:00 B\r\n") == [("09:00", "A"), ("10:00", "B")]


def test_rendered_itinerary_round_trips(parser):
    items = [
        ItineraryItem(id="1", time="09:40", activity="自宅を出る"),
        ItineraryItem(id="2", time="11:55", activity="北ノ麺 もりうち"),
        ItineraryItem(id="3", time="18:26", activity="自宅 着"),
    ]

    rendered = render_itinerary(items)

    assert parsed(parser, rendered) == [(i.time, i.activity) for i in items]


@pytest.mark.parametrize("token,expected", [
    ("9:05", "09:05"),
    ("09:05", "09:05"),
    (" 23:59 ", "23:59"),
    ("9", None),
    ("123:00", None),
    ("ten", None),
])
def test_normalize_time(token, expected):
    assert normalize_time(token) == expected
