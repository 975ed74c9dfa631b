# tabiplan/api/workspace.py
"""Lifecycle management for per-browser planning workspaces."""

import time
import threading
import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Optional, Any

from tabiplan.api.config import get_workspace_config
from tabiplan.api.shell import ShellState
from tabiplan.api.store import ItineraryStore

logger = logging.getLogger(__name__)


class Workspace:
    """One user's itinerary plus the page state around it.

    The lock serializes itinerary edits and the suggestion in-flight check.
    """

    def __init__(self, workspace_id: str):
        self.workspace_id = workspace_id
        self.store = ItineraryStore()
        self.state = ShellState()
        self.lock = threading.RLock()

        self.created_at = datetime.now()
        self.last_activity = datetime.now()

    def touch(self):
        self.last_activity = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "workspace_id": self.workspace_id,
                "items": self.store.to_list(),
                "state": self.state.to_dict(),
            }


class WorkspaceManager:
    """Keeps workspaces in memory until they expire."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, start_cleanup: bool = True):
        self.config = config or get_workspace_config()
        self.workspaces: Dict[str, Workspace] = {}

        # Thread safety
        self.lock = threading.Lock()

        self.cleanup_thread = None
        if start_cleanup:
            self.cleanup_thread = threading.Thread(
                target=self._cleanup_loop,
                daemon=True
            )
            self.cleanup_thread.start()

        logger.info("WorkspaceManager initialized")

    def create_workspace(self) -> Workspace:
        """Create a new, empty workspace."""
        with self.lock:
            workspace_id = f"ws_{secrets.token_urlsafe(16)}"
            workspace = Workspace(workspace_id)
            self.workspaces[workspace_id] = workspace

        logger.info(f"Created workspace {workspace_id}")
        return workspace

    def get_workspace(self, workspace_id: Optional[str]) -> Optional[Workspace]:
        """Get an existing workspace by ID.

        Args:
            workspace_id: Workspace ID to retrieve

        Returns:
            Workspace object or None if not found
        """
        if not workspace_id:
            return None
        with self.lock:
            workspace = self.workspaces.get(workspace_id)
        if workspace:
            workspace.touch()
        return workspace

    def get_or_create(self, workspace_id: Optional[str]) -> Workspace:
        workspace = self.get_workspace(workspace_id)
        if workspace is None:
            if workspace_id:
                logger.info(f"Workspace {workspace_id} expired or unknown, starting a new one")
            workspace = self.create_workspace()
        return workspace

    def remove_workspace(self, workspace_id: str):
        with self.lock:
            if self.workspaces.pop(workspace_id, None) is not None:
                logger.info(f"Removed workspace {workspace_id}")

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            workspaces = list(self.workspaces.values())

        return {
            "total_workspaces": len(workspaces),
            "loading_suggestions": sum(1 for w in workspaces if w.state.is_loading),
            "total_items": sum(len(w.store) for w in workspaces),
            "config": {
                "timeout_seconds": self.config["session_timeout_seconds"],
            },
        }

    def _cleanup_loop(self):
        """Background thread to clean up expired workspaces."""
        while True:
            try:
                time.sleep(self.config.get("cleanup_interval_seconds", 60))
                self.cleanup_expired()
            except Exception as e:
                logger.error(f"Error in cleanup loop: {e}")

    def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """Remove workspaces idle for longer than the timeout.

        A workspace with a suggestion still loading is kept.

        Returns:
            Number of workspaces removed
        """
        timeout_seconds = self.config["session_timeout_seconds"]
        cutoff_time = (now or datetime.now()) - timedelta(seconds=timeout_seconds)

        with self.lock:
            expired = [
                wid for wid, w in self.workspaces.items()
                if w.last_activity < cutoff_time and not w.state.is_loading
            ]
            for wid in expired:
                del self.workspaces[wid]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired workspaces")
        return len(expired)
