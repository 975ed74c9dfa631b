# tabiplan/api/config.py
"""Configuration management for the planner API."""
import os
from dotenv import load_dotenv

load_dotenv()


def get_openai_api_key():
    """Get OpenAI API key from environment."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not set")
    return api_key


def get_suggestion_config():
    """Get text-generation settings for plan suggestions."""
    return {
        "model": os.getenv("OPENAI_CHAT_MODEL", "gpt-4.1"),
        "temperature": float(os.getenv("SUGGESTION_TEMPERATURE", "0.7")),
        "max_tokens": int(os.getenv("SUGGESTION_MAX_TOKENS", "2048")),
    }


def get_workspace_config():
    """Get workspace lifetime and worker pool settings."""
    return {
        "session_timeout_seconds": int(os.getenv("WORKSPACE_TIMEOUT_SECONDS", "86400")),
        "cleanup_interval_seconds": int(os.getenv("WORKSPACE_CLEANUP_INTERVAL_SECONDS", "60")),
        "suggestion_workers": int(os.getenv("SUGGESTION_WORKERS", "4")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


# Pre-filled time of the "add" form.
DEFAULT_NEW_TIME = "10:00"
