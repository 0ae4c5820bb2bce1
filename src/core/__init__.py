"""Core configuration and shared utilities."""

from dotenv import load_dotenv

from .config import DEFAULT_CARD_VERSION, DEFAULT_SCHEMA_URI, Settings, get_settings

load_dotenv()

__all__ = ["DEFAULT_CARD_VERSION", "DEFAULT_SCHEMA_URI", "Settings", "get_settings"]
