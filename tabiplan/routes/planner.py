# tabiplan/routes/planner.py
"""Planner routes and blueprint configuration."""

import logging
from flask import Blueprint, jsonify, request, session

from tabiplan.api.errors import (
    InvalidTransitionError,
    SuggestionInFlightError,
    ValidationError,
)
from tabiplan.api.prompts import CONSTRAINT_TEMPLATES
from tabiplan.api.services.itinerary_service import ItineraryService
from tabiplan.api.config import DEFAULT_NEW_TIME

logger = logging.getLogger(__name__)

EDITOR_ACTIONS = ("begin_import", "begin_add", "begin_edit", "cancel")


def json_body():
    """Return the request's JSON object, or {} when there is no body.

    Raises:
        ValidationError: If the body is JSON but not an object
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("invalid-body", "Request body must be a JSON object")
    return data


def text_field(data, name, default="", optional=False):
    """Read a string field from a JSON body.

    Args:
        data: Parsed JSON object
        name: Field name
        default: Value used when the field is missing
        optional: Whether ``null`` is accepted (returned as None)

    Raises:
        ValidationError: If the field is present but not a string
    """
    value = data.get(name, default)
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise ValidationError("invalid-field", f"Field '{name}' must be a string")
    return value


def create_planner_blueprint(workspaces, suggestions):
    """Create and configure the planner blueprint.

    Args:
        workspaces: WorkspaceManager holding every browser's itinerary
        suggestions: SuggestionService used for AI requests

    Returns:
        Configured Flask Blueprint
    """
    planner_bp = Blueprint("planner", __name__, url_prefix="/planner")

    def current_workspace():
        workspace = workspaces.get_or_create(session.get("workspace_id"))
        if session.get("workspace_id") != workspace.workspace_id:
            session["workspace_id"] = workspace.workspace_id
            session.modified = True
        return workspace

    def workspace_payload(workspace, **extra):
        payload = workspace.to_dict()
        payload.update(extra)
        return payload

    @planner_bp.errorhandler(ValidationError)
    def handle_validation_error(e):
        status = 404 if e.code == "not-found" else 400
        return jsonify(e.to_dict()), status

    @planner_bp.errorhandler(InvalidTransitionError)
    def handle_invalid_transition(e):
        return jsonify({"error": "invalid-transition", "message": str(e)}), 409

    @planner_bp.errorhandler(SuggestionInFlightError)
    def handle_in_flight(e):
        return jsonify({"error": "in-flight", "message": str(e)}), 409

    @planner_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "planner"})

    @planner_bp.route("/api/itinerary", methods=["GET"])
    def api_itinerary():
        """Return the current itinerary and page state."""
        workspace = current_workspace()
        return jsonify(workspace_payload(workspace, default_time=DEFAULT_NEW_TIME))

    @planner_bp.route("/api/itinerary/items", methods=["POST"])
    def api_add_item():
        data = json_body()
        workspace = current_workspace()
        item = ItineraryService.add_item(
            workspace,
            text_field(data, "time", DEFAULT_NEW_TIME),
            text_field(data, "activity"),
            text_field(data, "url", None, optional=True),
        )
        return jsonify(workspace_payload(workspace, item=item.to_dict())), 201

    @planner_bp.route("/api/itinerary/items/<item_id>", methods=["PUT"])
    def api_update_item(item_id):
        data = json_body()
        workspace = current_workspace()
        item = ItineraryService.update_item(
            workspace,
            item_id,
            text_field(data, "time"),
            text_field(data, "activity"),
            text_field(data, "url", None, optional=True),
        )
        return jsonify(workspace_payload(workspace, item=item.to_dict()))

    @planner_bp.route("/api/itinerary/items/<item_id>", methods=["DELETE"])
    def api_delete_item(item_id):
        ItineraryService.delete_item(current_workspace(), item_id)
        return "", 204

    @planner_bp.route("/api/itinerary/import", methods=["POST"])
    def api_import():
        data = json_body()
        workspace = current_workspace()
        items = ItineraryService.import_text(workspace, text_field(data, "text"))
        return jsonify(workspace_payload(
            workspace,
            imported=len(items),
            imported_items=[item.to_dict() for item in items],
        ))

    @planner_bp.route("/api/editor/<action>", methods=["POST"])
    def api_editor(action):
        if action not in EDITOR_ACTIONS:
            return jsonify({"error": "unknown-action", "message": action}), 404

        data = json_body()
        item_id = text_field(data, "item_id", None, optional=True)
        workspace = current_workspace()
        try:
            state = ItineraryService.apply_editor_action(workspace, action, item_id)
        except ValueError as e:
            return jsonify({"error": "bad-request", "message": str(e)}), 400
        return jsonify({"state": state})

    @planner_bp.route("/api/constraint-templates")
    def api_constraint_templates():
        return jsonify({"templates": CONSTRAINT_TEMPLATES})

    @planner_bp.route("/api/suggestions", methods=["GET", "POST"])
    def api_suggestions():
        """Start a suggestion, or report the current one."""
        workspace = current_workspace()
        if request.method == "GET":
            return jsonify(workspace.to_dict()["state"])

        data = json_body()
        suggestions.request_suggestion(
            workspace,
            text_field(data, "problem"),
            text_field(data, "constraints"),
            text_field(data, "mode", "schedule"),
        )
        return jsonify(workspace.to_dict()["state"]), 202

    return planner_bp


__all__ = ['create_planner_blueprint']
