# tabiplan/api/shell.py
"""Explicit state of the single-page planner.

The editor panel is in one of four modes and the suggestion panel has its
own status, since a suggestion may be loading while the user edits. None of
this is visible to the store, parser or prompt builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tabiplan.api.errors import InvalidTransitionError
from tabiplan.api.models import SuggestionMode


class EditorMode(str, Enum):
    IDLE = "idle"
    IMPORTING = "importing"
    ADDING = "adding"
    EDITING = "editing"


class SuggestionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class ShellState:
    """What the page is currently showing."""

    editor_mode: EditorMode = EditorMode.IDLE
    editing_item_id: Optional[str] = None
    suggestion_mode: SuggestionMode = SuggestionMode.SCHEDULE
    suggestion_status: SuggestionStatus = SuggestionStatus.IDLE
    suggestion_text: str = ""
    error_message: Optional[str] = None

    # -- editor panel -------------------------------------------------------

    def begin_import(self) -> None:
        self._require_idle("import")
        self.editor_mode = EditorMode.IMPORTING

    def begin_add(self) -> None:
        self._require_idle("add")
        self.editor_mode = EditorMode.ADDING

    def begin_edit(self, item_id: str) -> None:
        """Open an item for editing; switching straight to another item is allowed."""
        if self.editor_mode not in (EditorMode.IDLE, EditorMode.EDITING):
            raise InvalidTransitionError(
                f"Cannot edit an item while {self.editor_mode.value}"
            )
        self.editor_mode = EditorMode.EDITING
        self.editing_item_id = item_id

    def finish(self) -> None:
        """Close whichever panel is open."""
        self.editor_mode = EditorMode.IDLE
        self.editing_item_id = None

    cancel = finish

    def _require_idle(self, action: str) -> None:
        if self.editor_mode is not EditorMode.IDLE:
            raise InvalidTransitionError(
                f"Cannot start {action} while {self.editor_mode.value}"
            )

    # -- suggestion panel ---------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.suggestion_status is SuggestionStatus.LOADING

    def start_loading(self, mode: SuggestionMode) -> None:
        self.suggestion_mode = mode
        self.suggestion_status = SuggestionStatus.LOADING
        self.suggestion_text = ""
        self.error_message = None

    def set_suggestion(self, text: str) -> None:
        self.suggestion_status = SuggestionStatus.READY
        self.suggestion_text = text
        self.error_message = None

    def set_error(self, message: str) -> None:
        """Record a failure; a loading request ends, an earlier result stays."""
        if self.is_loading:
            self.suggestion_status = SuggestionStatus.FAILED
            self.suggestion_text = ""
        self.error_message = message

    def to_dict(self) -> dict:
        return {
            "editor_mode": self.editor_mode.value,
            "editing_item_id": self.editing_item_id,
            "suggestion_mode": self.suggestion_mode.value,
            "suggestion_status": self.suggestion_status.value,
            "suggestion_text": self.suggestion_text,
            "error_message": self.error_message,
        }
