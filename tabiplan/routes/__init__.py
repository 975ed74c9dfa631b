# tabiplan/routes/__init__.py
from tabiplan.routes.planner import create_planner_blueprint

__all__ = ["create_planner_blueprint"]
