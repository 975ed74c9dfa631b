# tabiplan/app.py
"""Flask application factory."""

import atexit
import os
import logging

from flask import Flask
from flask_cors import CORS

from tabiplan.api.config import (
    get_openai_api_key,
    get_suggestion_config,
    get_workspace_config,
)
from tabiplan.api.llm import OpenAIGateway
from tabiplan.api.services.suggestion_service import SuggestionService
from tabiplan.api.workspace import WorkspaceManager
from tabiplan.routes.planner import create_planner_blueprint

logger = logging.getLogger(__name__)


def create_app(gateway=None, workspaces=None, suggestions=None, start_cleanup=True):
    """Build the planner app.

    Args:
        gateway: SuggestionGateway to use; an OpenAI gateway is built from
            the environment when omitted
        workspaces: WorkspaceManager; a fresh one by default
        suggestions: SuggestionService; built around ``gateway`` by default
        start_cleanup: Whether the workspace expiry thread runs

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=86400,
    )
    app.json.ensure_ascii = False

    CORS(app, origins="*", supports_credentials=True)

    workspace_config = get_workspace_config()

    if suggestions is None:
        if gateway is None:
            cfg = get_suggestion_config()
            gateway = OpenAIGateway(
                api_key=get_openai_api_key(),
                model=cfg["model"],
                temperature=cfg["temperature"],
                max_tokens=cfg["max_tokens"],
            )
            logger.info(f"Using OpenAI gateway with model {cfg['model']}")
        suggestions = SuggestionService(
            gateway, max_workers=workspace_config["suggestion_workers"]
        )
        # An injected service is shut down by its owner.
        atexit.register(suggestions.shutdown, wait=False)

    if workspaces is None:
        workspaces = WorkspaceManager(workspace_config, start_cleanup=start_cleanup)

    app.extensions["tabiplan.workspaces"] = workspaces
    app.extensions["tabiplan.suggestions"] = suggestions
    app.register_blueprint(create_planner_blueprint(workspaces, suggestions))

    @app.route("/debug")
    def debug():
        """Simple JSON health endpoint."""
        return {
            "status": "ok",
            "workspaces": workspaces.get_stats(),
        }

    return app
