"""
LanguageTool Integration for MicroPause
=======================================
Grammar, punctuation and style findings from the LanguageTool HTTP API,
mapped onto MicroPause issue categories.

Requires: requests
"""

__version__ = "1.0.0"

# Lazy imports - only load when accessed
_client = None


def get_client():
    """Get the shared LanguageToolClient instance (lazy loaded)."""
    global _client
    if _client is None:
        from .client import LanguageToolClient
        _client = LanguageToolClient()
    return _client


def reset_client():
    """Drop the shared client so the next get_client() rereads configuration."""
    global _client
    from ..config import reset_config
    reset_config()
    _client = None


def is_available() -> bool:
    """Check if the LanguageTool integration is enabled and importable."""
    try:
        return get_client().is_available
    except ImportError:
        return False


def get_status() -> dict:
    """Get LanguageTool integration status."""
    try:
        return get_client().get_status()
    except ImportError as e:
        return {
            'available': False,
            'error': f"requests not installed: {e}",
            'language': None,
            'api_url': None,
        }
