# tabiplan/api/errors.py
"""Error types raised by the planner core and services."""

from typing import Optional


# Messages shown to the user for the failures they can cause themselves.
USER_MESSAGES = {
    "empty-input": "問題点や制約を入力してください。",
    "empty-activity": "予定の内容を入力してください。",
    "invalid-time": "時刻は HH:MM の形式で入力してください。",
}


class ValidationError(ValueError):
    """Input rejected before any state change.

    Attributes:
        code: Stable machine-readable reason, e.g. ``"empty-input"``
        message: Human readable description
    """

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        self.message = message or USER_MESSAGES.get(code, code)
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class ItemNotFoundError(ValidationError):
    """Raised when an update references an id that is not in the store."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__("not-found", f"Itinerary item {item_id} not found")


class GatewayError(Exception):
    """The text-generation service failed (network, auth, quota, bad reply)."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(detail)


class SuggestionInFlightError(RuntimeError):
    """A suggestion is already being generated for this workspace."""


class InvalidTransitionError(RuntimeError):
    """The editor panel cannot move to the requested mode from where it is."""
