# tabiplan/api/prompts.py
"""Request building and prompt text for the suggestion service.

Templates are written in Japanese; the model is told to answer in the same
strict list format the import parser understands.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from tabiplan.api.errors import ValidationError
from tabiplan.api.models import ItineraryItem, SuggestionMode, SuggestionRequest

EMPTY_ITINERARY_TEXT = "予定はまだ入力されていません。"

SYSTEM_INSTRUCTION = (
    "あなたは、日本の旅行プランを提案するAIアシスタントです。"
    "あなたの役割は、ユーザーから提供された情報に基づき、指定された厳格な形式で、"
    "旅行の代替案またはおすすめスポットを提案することです。"
    "余計な挨拶、前置き、結びの言葉、説明文は一切含めず、指示された形式のテキストのみを生成してください。"
)

TASK_INSTRUCTIONS = {
    SuggestionMode.SCHEDULE: "今回のタスクは「代替案」の形式で出力してください。",
    SuggestionMode.SPOTS: "今回のタスクは「おすすめスポット」の形式で出力してください。",
}

CONSTRAINT_TEMPLATES = [
    "[時間]までに[場所]に着く必要があります。",
    "予算は[金額]円以内です。",
    "[場所]だけは絶対に行きたいです。",
    "屋内アクティビティを希望します。",
    "子供も楽しめる場所を希望します。",
]

CONTENTS_TEMPLATE = """
# 元の旅行計画:
---
{itinerary}
---

# 直面している問題:
---
{problem}
---

# 新しい計画への制約・要望:
---
{constraints}
---

# 今回のタスク:
---
{task}
---

# 絶対的な指示:
1. 出力形式:
   - 代替案の場合: 元の計画と同様のリスト形式で、1つだけ提案してください。時間と活動内容を記載します。
   - おすすめスポットの場合: 場所の名前、概要、営業時間、定休日をセットにして、リスト形式で最大5つまで提案してください。各項目名は必ず「概要：」「営業時間：」「定休日：」としてください。
2. 禁止事項:
   - 太字、マークダウンなどの装飾は絶対に使用しないでください。
   - 指示されたリスト以外の文章（例: 「こちらが代替案です」、「いかがでしょうか？」など）は一切含めないでください。
   - 出力は指示されたリスト形式のテキストのみにしてください。

# 出力例（代替案の場合）:
- 09:40 自宅を出る
- 10:00 石神井公園駅 発
- 11:05 鶴見駅 着
- 11:10 曹洞宗 大本山 總持寺
- 11:55〜12:14 北ノ麺　もりうち
- 12:50 鶴見駅 発
- 13:29~13:36 弁天橋駅
- 13:41~13:56 海芝浦駅
- 14:06~14:09 国道駅
- 14:18~14:23 鶴見川　散策
- 14:38~14:53 オリンピック(ホームセンター)
- 15:22 鶴見駅 発
- 17:39 神保原駅 着
- 18:26 自宅 着

# 出力例（おすすめスポットの場合）:
1. シァル鶴見
概要：JR鶴見駅直結のショッピングセンター。ファッション、雑貨、レストランなど多彩な店舗が揃う。
営業時間：10:00～21:00 (店舗により異なる)
定休日：不定休

2. 鶴見区民文化センター サルビアホール
概要：コンサートや演劇が楽しめる文化施設。地域のイベントも多数開催。
営業時間：9:00～22:00
定休日：年末年始、施設点検日

3. キリン横浜ビアビレッジ
概要：ビールの製造工程を見学できるほか、できたてのビールを味わえるレストランも併設。
営業時間：10:00～17:00
定休日：月曜日（祝日の場合は翌日）、年末年始
"""


def render_item(item: ItineraryItem) -> str:
    line = f"- {item.time}: {item.activity}"
    if item.url:
        line += f" ({item.url})"
    return line


def render_itinerary(items: Iterable[ItineraryItem]) -> str:
    """Render items one per line, or the placeholder when there are none."""
    lines = [render_item(item) for item in items]
    return "\n".join(lines) if lines else EMPTY_ITINERARY_TEXT


def append_constraint_template(constraints: str, template: str) -> str:
    """Add a template sentence on its own line after any existing text."""
    return f"{constraints}\n{template}" if constraints else template


class SuggestionRequestBuilder:
    """Validate user input and package it for the gateway."""

    @staticmethod
    def build(itinerary: Sequence[ItineraryItem], problem: str, constraints: str,
              mode=SuggestionMode.SCHEDULE) -> SuggestionRequest:
        """Build a request from the current itinerary and the user's input.

        Args:
            itinerary: Time-sorted snapshot of the store
            problem: What went wrong (rain, delays...)
            constraints: Requirements for the new plan
            mode: ``SuggestionMode`` or its string value

        Returns:
            SuggestionRequest ready for the gateway

        Raises:
            ValidationError: ``empty-input`` when both texts are blank,
                ``invalid-mode`` for an unknown mode
        """
        problem = problem or ""
        constraints = constraints or ""
        if not problem.strip() and not constraints.strip():
            raise ValidationError("empty-input")

        snapshot = tuple(itinerary)
        return SuggestionRequest(
            itinerary=snapshot,
            itinerary_text=render_itinerary(snapshot),
            problem=problem,
            constraints=constraints,
            mode=SuggestionMode.parse(mode),
        )


def compose_contents(request: SuggestionRequest) -> str:
    """Compose the single user message sent to the model."""
    return CONTENTS_TEMPLATE.format(
        itinerary=request.itinerary_text,
        problem=request.problem,
        constraints=request.constraints,
        task=TASK_INSTRUCTIONS[request.mode],
    )
