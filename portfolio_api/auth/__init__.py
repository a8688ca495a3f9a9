"""
Access control for the portfolio API.
Write operations are guarded by a static backend API key.
"""

from portfolio_api.auth.api_key import RequireApiKey, require_api_key

__all__ = [
    "RequireApiKey",
    "require_api_key",
]
