# tabiplan/api/services/itinerary_service.py
"""Service layer for itinerary edits and imports."""

import logging
from typing import Dict, Any, List, Optional

from tabiplan.api.errors import ValidationError
from tabiplan.api.import_parser import ImportParser
from tabiplan.api.models import ItineraryItem
from tabiplan.api.workspace import Workspace

logger = logging.getLogger(__name__)


class ItineraryService:
    """Applies user edits to a workspace and keeps the editor panel in step."""

    @staticmethod
    def add_item(workspace: Workspace, time: str, activity: str,
                 url: Optional[str] = None) -> ItineraryItem:
        """Add an activity and close the add panel.

        Args:
            workspace: Target workspace
            time: Time of day (``HH:MM``)
            activity: Description, required
            url: Optional reference link

        Returns:
            The stored item

        Raises:
            ValidationError: If the activity is empty or the time malformed
        """
        with workspace.lock:
            try:
                item = workspace.store.add(time, activity, url)
            except ValidationError as e:
                logger.warning(f"Rejected add in {workspace.workspace_id}: {e.code}")
                raise
            workspace.state.finish()

        logger.info(f"Added '{item.activity}' at {item.time} to {workspace.workspace_id}")
        return item

    @staticmethod
    def update_item(workspace: Workspace, item_id: str, time: str, activity: str,
                    url: Optional[str] = None) -> ItineraryItem:
        """Replace an existing activity and close the edit panel.

        Raises:
            ValidationError: If the activity is empty or the time malformed
            ItemNotFoundError: If the item no longer exists
        """
        with workspace.lock:
            try:
                item = workspace.store.update(item_id, time, activity, url)
            except ValidationError as e:
                logger.warning(f"Rejected update of {item_id} in {workspace.workspace_id}: {e.code}")
                raise
            workspace.state.finish()

        logger.info(f"Updated {item_id} in {workspace.workspace_id}")
        return item

    @staticmethod
    def delete_item(workspace: Workspace, item_id: str) -> None:
        with workspace.lock:
            workspace.store.delete(item_id)
            if workspace.state.editing_item_id == item_id:
                workspace.state.finish()

    @staticmethod
    def import_text(workspace: Workspace, text: str,
                    parser: Optional[ImportParser] = None) -> List[ItineraryItem]:
        """Parse pasted text, merge the result and close the import panel.

        Blank text just closes the panel.

        Returns:
            The newly imported items in source order
        """
        parser = parser or ImportParser()
        items = parser.parse(text)

        with workspace.lock:
            if items:
                workspace.store.extend(items)
            workspace.state.finish()

        logger.info(f"Imported {len(items)} item(s) into {workspace.workspace_id}")
        return items

    @staticmethod
    def apply_editor_action(workspace: Workspace, action: str,
                            item_id: Optional[str] = None) -> Dict[str, Any]:
        """Move the editor panel between modes.

        Args:
            workspace: Target workspace
            action: ``begin_import``, ``begin_add``, ``begin_edit`` or ``cancel``
            item_id: Item to edit, for ``begin_edit``

        Returns:
            The new shell state

        Raises:
            ValueError: For an unknown action or a missing item
            InvalidTransitionError: If the panel cannot move there now
        """
        with workspace.lock:
            state = workspace.state
            if action == "begin_import":
                state.begin_import()
            elif action == "begin_add":
                state.begin_add()
            elif action == "begin_edit":
                if not item_id or workspace.store.get(item_id) is None:
                    raise ValueError(f"No itinerary item {item_id!r} to edit")
                state.begin_edit(item_id)
            elif action == "cancel":
                state.cancel()
            else:
                raise ValueError(f"Unknown editor action: {action}")
            return state.to_dict()
