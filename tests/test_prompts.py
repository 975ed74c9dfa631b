"""Unit tests for request building and prompt composition."""

import pytest

from tabiplan.api.errors import ValidationError
from tabiplan.api.models import ItineraryItem, SuggestionMode
from tabiplan.api.prompts import (
    CONSTRAINT_TEMPLATES,
    EMPTY_ITINERARY_TEXT,
    SuggestionRequestBuilder,
    append_constraint_template,
    compose_contents,
    render_itinerary,
)


ITEMS = (
    ItineraryItem(id="1", time="09:40", activity="自宅を出る"),
    ItineraryItem(id="2", time="11:10", activity="總持寺", url="https://example.jp/sojiji"),
)


def test_render_itinerary_golden():
    assert render_itinerary(ITEMS) == (
        "- 09:40: 自宅を出る\n"
        "- 11:10: 總持寺 (https://example.jp/sojiji)"
    )


def test_render_empty_itinerary_uses_placeholder():
    assert render_itinerary([]) == EMPTY_ITINERARY_TEXT == "予定はまだ入力されていません。"


def test_empty_problem_and_constraints_are_rejected():
    with pytest.raises(ValidationError) as exc:
        SuggestionRequestBuilder.build([], "", "", SuggestionMode.SCHEDULE)
    assert exc.value.code == "empty-input"


def test_whitespace_only_inputs_are_rejected():
    with pytest.raises(ValidationError):
        SuggestionRequestBuilder.build(ITEMS, "  \n", "\t", "spots")


def test_problem_alone_is_enough():
    request = SuggestionRequestBuilder.build([], "rain", "")

    assert request.itinerary_text == EMPTY_ITINERARY_TEXT
    assert request.problem == "rain"
    assert request.constraints == ""
    assert request.mode is SuggestionMode.SCHEDULE


def test_constraints_alone_is_enough_and_text_is_raw():
    request = SuggestionRequestBuilder.build(ITEMS, "", "  18時までに東京駅  ", "spots")

    assert request.constraints == "  18時までに東京駅  "
    assert request.mode is SuggestionMode.SPOTS
    assert request.itinerary == ITEMS


def test_unknown_mode_is_rejected():
    with pytest.raises(ValidationError) as exc:
        SuggestionRequestBuilder.build(ITEMS, "rain", "", "weather")
    assert exc.value.code == "invalid-mode"


def test_compose_contents_embeds_every_section():
    request = SuggestionRequestBuilder.build(ITEMS, "急な大雨", "屋内希望", "schedule")

    contents = compose_contents(request)

    assert "- 09:40: 自宅を出る" in contents
    assert "# 直面している問題:\n---\n急な大雨\n---" in contents
    assert "# 新しい計画への制約・要望:\n---\n屋内希望\n---" in contents
    assert "「代替案」の形式" in contents
    assert "マークダウン" in contents


def test_compose_contents_spots_task():
    request = SuggestionRequestBuilder.build([], "電車の遅延", "", SuggestionMode.SPOTS)

    contents = compose_contents(request)

    assert "「おすすめスポット」の形式" in contents
    assert "概要：" in contents and "営業時間：" in contents and "定休日：" in contents
    assert EMPTY_ITINERARY_TEXT in contents


def test_append_constraint_template():
    template = CONSTRAINT_TEMPLATES[1]

    assert append_constraint_template("", template) == template
    assert append_constraint_template("屋内希望", template) == f"屋内希望\n{template}"
