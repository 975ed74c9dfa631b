"""Itinerary re-planning: time-ordered plans, text import and AI suggestions."""
